"""
Mirror Manager — Orchestrates single-version and batch mirroring.

This is the main entry point for mirror operations. It composes the
version catalog, the tag-backed state store, the fetcher and the publish
gateway.

## Usage from other modules:

    from distmirror.mirror.manager import MirrorManager

    manager = MirrorManager.from_settings(settings)
    receipt = manager.mirror_version("8.5", "bin")
    result = manager.mirror_all(floor="8.0", distribution="bin")

A single-version mirror raises FetchError when the download fails. A batch
run never raises for a failed item: the failure is logged, counted and
the next version is attempted.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..errors import ConfigurationError, FetchError
from ..models.batch import BatchResult, BatchTally
from ..models.receipt import MirrorReceipt
from .catalog import VersionCatalog
from .config import DistributionKind, DistributionRequest, MirrorSettings
from .fetcher import ArtifactFetcher
from .git_tags import GitTagStore
from .publish import CommandPublishGateway, LoggingPublishGateway, PublishGateway
from .selection import select_from
from .state import MirrorStateStore
from .version import Version, parse

logger = logging.getLogger(__name__)


class MirrorManager:
    """
    Drives mirror runs.

    Strictly sequential: each version completes (mirrored, skipped or
    failed) before the next one starts.
    """

    def __init__(
        self,
        settings: MirrorSettings,
        catalog: VersionCatalog,
        state: MirrorStateStore,
        fetcher: ArtifactFetcher,
        publisher: Optional[PublishGateway] = None,
    ):
        self.settings = settings
        self.catalog = catalog
        self.state = state
        self.fetcher = fetcher
        self.publisher = publisher or LoggingPublishGateway(settings.group_id)

    @classmethod
    def from_settings(cls, settings: MirrorSettings) -> "MirrorManager":
        """Create a manager wired to git, httpx and the configured publisher."""
        publisher: PublishGateway
        if settings.publish_command:
            publisher = CommandPublishGateway(
                settings.publish_command, cwd=settings.root, group_id=settings.group_id
            )
        else:
            publisher = LoggingPublishGateway(settings.group_id)

        return cls(
            settings=settings,
            catalog=VersionCatalog(settings),
            state=MirrorStateStore(GitTagStore(settings.root, remote=settings.git_remote)),
            fetcher=ArtifactFetcher(settings),
            publisher=publisher,
        )

    # ─── Single Version ─────────────────────────────────────

    def mirror_version(
        self,
        version: Optional[str],
        distribution: Optional[str],
    ) -> MirrorReceipt:
        """
        Mirror one version.

        Raises:
            ConfigurationError: Version or distribution missing or malformed
            FetchError: The archive could not be downloaded
        """
        kind = DistributionKind.parse(distribution)
        if version is None or not version.strip():
            raise ConfigurationError("is required", field="version")
        request = self.settings.request(parse(version), kind)

        return self._mirror(request)

    # ─── Batch ──────────────────────────────────────────────

    def plan(self, floor: str, distribution: str) -> List[Tuple[Version, bool]]:
        """
        List the versions a batch run would handle.

        Returns (version, already_mirrored) pairs in mirror order.
        """
        kind, _ = self._validate_batch(floor, distribution)
        versions = select_from(self.catalog.list_available(), floor)
        return [
            (version, self.state.exists(self.settings.request(version, kind).artifact_id))
            for version in versions
        ]

    def mirror_all(self, floor: str, distribution: str) -> BatchResult:
        """
        Mirror every upstream version at or above floor.

        Raises:
            ConfigurationError: Floor or distribution malformed (before discovery)
        """
        kind, floor_version = self._validate_batch(floor, distribution)

        logger.info(
            f"[mirror] Starting batch mirroring from {self.settings.display_product} "
            f"{floor_version} to latest ({kind.value} distribution)"
        )

        versions = select_from(self.catalog.list_available(), floor)
        logger.info(
            f"[mirror] Found {len(versions)} versions to mirror: "
            f"{', '.join(str(v) for v in versions)}"
        )

        tally = BatchTally(distribution=kind.value, floor=str(floor_version))

        for version in versions:
            request = self.settings.request(version, kind)
            logger.info(
                f"[mirror] Processing {self.settings.display_product} {version}",
                extra={"version": str(version)},
            )
            tally.add(self._mirror_isolated(request))

        result = tally.freeze()
        logger.info(
            f"[mirror] Batch mirroring completed: {result.mirrored} mirrored, "
            f"{result.skipped} skipped, {result.failed} failed"
        )
        return result

    def _validate_batch(self, floor: str, distribution: str) -> Tuple[DistributionKind, Version]:
        kind = DistributionKind.parse(distribution)
        if floor is None or not floor.strip():
            raise ConfigurationError("is required", field="from_version")
        return kind, parse(floor)

    def _mirror_isolated(self, request: DistributionRequest) -> MirrorReceipt:
        try:
            return self._mirror(request)
        except FetchError as e:
            logger.error(
                f"[mirror] Failed to mirror {self.settings.display_product} {request.version}: {e}",
                extra={"artifact_id": request.artifact_id},
            )
            return self._failed(request, "fetch_error", str(e))
        except Exception as e:
            logger.error(
                f"[mirror] Unexpected error mirroring {self.settings.display_product} "
                f"{request.version}: {e}",
                exc_info=True,
                extra={"artifact_id": request.artifact_id},
            )
            return self._failed(request, "unexpected_error", str(e))

    # ─── Stages ─────────────────────────────────────────────

    def _mirror(self, request: DistributionRequest) -> MirrorReceipt:
        """CHECK_STATE, FETCH, RECORD, PUBLISH for one request."""
        key = request.artifact_id
        version = str(request.version)
        distribution = request.distribution.value

        if self.state.exists(key):
            logger.info(
                f"[mirror] {self.settings.display_product} {version}-{distribution} "
                "already mirrored (tag exists), skipping",
                extra={"artifact_id": key},
            )
            return MirrorReceipt.skipped(version, distribution, key)

        artifact = self.fetcher.fetch(request)

        message = (
            f"{self.settings.display_product} {version} {distribution} distribution mirrored"
        )
        outcome = self.state.record(key, message)
        warnings = list(outcome.warnings)

        if not self.publisher.publish(request, artifact):
            warnings.append(f"Publishing {request.archive_name} failed")

        logger.info(
            f"[mirror] Successfully mirrored {self.settings.display_product} {version}-{distribution}",
            extra={"artifact_id": key},
        )
        return MirrorReceipt.mirrored(
            version,
            distribution,
            key,
            path=str(artifact.publish_path),
            size_bytes=artifact.size_bytes,
            warnings=warnings,
        )

    def _failed(self, request: DistributionRequest, code: str, message: str) -> MirrorReceipt:
        return MirrorReceipt.failed(
            str(request.version),
            request.distribution.value,
            request.artifact_id,
            error_code=code,
            error_message=message,
        )
