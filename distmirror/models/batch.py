"""
Batch Model — Tally of a batch mirror run.

BatchTally is filled in while the run progresses; freeze() turns it into
the immutable BatchResult handed back to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .receipt import MirrorReceipt


@dataclass(frozen=True)
class BatchResult:
    """Final counts and per-outcome versions of one batch run."""

    distribution: str
    floor: str
    receipts: Tuple[MirrorReceipt, ...] = ()

    @property
    def mirrored_versions(self) -> Tuple[str, ...]:
        return tuple(r.version for r in self.receipts if r.is_mirrored)

    @property
    def skipped_versions(self) -> Tuple[str, ...]:
        return tuple(r.version for r in self.receipts if r.is_skipped)

    @property
    def failed_versions(self) -> Tuple[str, ...]:
        return tuple(r.version for r in self.receipts if r.is_failed)

    @property
    def mirrored(self) -> int:
        return len(self.mirrored_versions)

    @property
    def skipped(self) -> int:
        return len(self.skipped_versions)

    @property
    def failed(self) -> int:
        return len(self.failed_versions)

    @property
    def total(self) -> int:
        return len(self.receipts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "distribution": self.distribution,
            "floor": self.floor,
            "mirrored": self.mirrored,
            "skipped": self.skipped,
            "failed": self.failed,
            "mirrored_versions": list(self.mirrored_versions),
            "skipped_versions": list(self.skipped_versions),
            "failed_versions": list(self.failed_versions),
            "receipts": [r.model_dump() for r in self.receipts],
        }


@dataclass
class BatchTally:
    """Mutable accumulator used while a batch is running."""

    distribution: str
    floor: str
    receipts: List[MirrorReceipt] = field(default_factory=list)

    def add(self, receipt: MirrorReceipt) -> None:
        self.receipts.append(receipt)

    def freeze(self) -> BatchResult:
        return BatchResult(
            distribution=self.distribution,
            floor=self.floor,
            receipts=tuple(self.receipts),
        )
