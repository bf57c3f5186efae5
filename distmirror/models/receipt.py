"""
Receipt Model — Outcome of mirroring one version.

Every version handled by the manager produces a receipt, regardless of
whether it was mirrored, skipped or failed.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetails(BaseModel):
    """Details about a failed mirror."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str


class MirrorReceipt(BaseModel):
    """
    Result of mirroring one distribution archive.

    Warnings carry non-fatal problems (tagging, pushing, publishing).
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["mirrored", "skipped", "failed"]
    version: str
    distribution: str
    artifact_id: str
    path: Optional[str] = None
    size_bytes: Optional[int] = None
    warnings: List[str] = Field(default_factory=list)
    error: Optional[ErrorDetails] = None
    ts_iso: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @classmethod
    def mirrored(
        cls,
        version: str,
        distribution: str,
        artifact_id: str,
        path: str,
        size_bytes: Optional[int] = None,
        warnings: Optional[List[str]] = None,
    ) -> "MirrorReceipt":
        """Create a receipt for a freshly mirrored archive."""
        return cls(
            status="mirrored",
            version=version,
            distribution=distribution,
            artifact_id=artifact_id,
            path=path,
            size_bytes=size_bytes,
            warnings=warnings or [],
        )

    @classmethod
    def skipped(
        cls,
        version: str,
        distribution: str,
        artifact_id: str,
    ) -> "MirrorReceipt":
        """Create a receipt for an archive that was already mirrored."""
        return cls(
            status="skipped",
            version=version,
            distribution=distribution,
            artifact_id=artifact_id,
        )

    @classmethod
    def failed(
        cls,
        version: str,
        distribution: str,
        artifact_id: str,
        error_code: str,
        error_message: str,
    ) -> "MirrorReceipt":
        """Create a receipt for an archive that could not be mirrored."""
        return cls(
            status="failed",
            version=version,
            distribution=distribution,
            artifact_id=artifact_id,
            error=ErrorDetails(code=error_code, message=error_message),
        )

    @property
    def is_mirrored(self) -> bool:
        return self.status == "mirrored"

    @property
    def is_skipped(self) -> bool:
        return self.status == "skipped"

    @property
    def is_failed(self) -> bool:
        return self.status == "failed"
