"""
Publish Gateway — Hand mirrored archives to the artifact repository.

Publishing itself belongs to the build tool. The gateway only invokes it
(or, without a configured command, logs what should be published).
Publish failures never fail a mirror: the archive stays in the publish
location and can be published by hand.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from .config import DistributionRequest
from .fetcher import FetchedArtifact

logger = logging.getLogger(__name__)


class PublishGateway(ABC):
    """Interface for the external publish step."""

    @abstractmethod
    def publish(self, request: DistributionRequest, artifact: FetchedArtifact) -> bool:
        """Publish an archive. Returns False if publishing failed."""
        pass


class LoggingPublishGateway(PublishGateway):
    """Logs the coordinate to publish without running anything."""

    def __init__(self, group_id: str = "org.gradle"):
        self.group_id = group_id

    def publish(self, request: DistributionRequest, artifact: FetchedArtifact) -> bool:
        logger.info(
            f"[publish] Ready to publish {request.coordinate(self.group_id)} "
            f"from {artifact.publish_path}"
        )
        return True


class CommandPublishGateway(PublishGateway):
    """
    Runs a publish command for each archive.

    The command template may use {version}, {distribution}, {artifact_id}
    and {path}, e.g.:

        ./gradlew publishToMavenLocal -PgradleVersion={version} -PdistributionType={distribution}
    """

    def __init__(self, command: str, cwd: Path, group_id: str = "org.gradle", timeout: int = 600):
        self.command = command
        self.cwd = cwd
        self.group_id = group_id
        self.timeout = timeout

    def render(self, request: DistributionRequest, artifact: FetchedArtifact) -> List[str]:
        """
        Fill in the command template and split it into arguments.

        Raises:
            KeyError, IndexError: Unknown placeholder in the template
            ValueError: Unbalanced quotes or braces in the template
        """
        text = self.command.format(
            version=request.version,
            distribution=request.distribution.value,
            artifact_id=request.artifact_id,
            path=artifact.publish_path,
        )
        return shlex.split(text)

    def publish(self, request: DistributionRequest, artifact: FetchedArtifact) -> bool:
        try:
            cmd = self.render(request, artifact)
        except (KeyError, IndexError, ValueError) as e:
            logger.error(f"[publish] Invalid publish command {self.command!r}: {e!r}")
            logger.error(
                f"[publish] You can manually publish {request.coordinate(self.group_id)} "
                f"from {artifact.publish_path}"
            )
            return False

        logger.info(f"[publish] Publishing {artifact.publish_path.name}: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                cwd=str(self.cwd),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.error(f"[publish] Failed to publish: {e}")
            logger.error(f"[publish] You can manually run: {' '.join(cmd)}")
            return False

        if result.returncode != 0:
            error = result.stderr.strip() or result.stdout.strip()
            logger.error(
                f"[publish] Publish command failed with exit code {result.returncode}: {error}"
            )
            logger.error(f"[publish] You can manually run: {' '.join(cmd)}")
            return False

        logger.info(f"[publish] Published {request.coordinate(self.group_id)}")
        return True
