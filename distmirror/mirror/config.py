"""
Mirror Configuration — Parse MIRROR_* environment variables.

Every setting has a working default, so an empty environment mirrors
Gradle distributions from services.gradle.org and discovers versions
through the GitHub releases API.

Typical overrides:
    MIRROR_GIT_REMOTE=origin
    MIRROR_PUBLISH_COMMAND="./gradlew publishToMavenLocal -PgradleVersion={version} -PdistributionType={distribution}"

The settings are passed explicitly into MirrorManager; nothing reads the
environment after from_env() returns.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ..errors import ConfigurationError
from .version import Version

logger = logging.getLogger(__name__)

DEFAULT_DIST_BASE_URL = "https://services.gradle.org/distributions"
DEFAULT_RELEASES_URL = "https://api.github.com/repos/gradle/gradle/releases?per_page=100"
DEFAULT_LATEST_URL = "https://api.github.com/repos/gradle/gradle/releases/latest"


class DistributionKind(str, Enum):
    """Packaging variant of a release."""

    BIN = "bin"
    ALL = "all"

    @classmethod
    def parse(cls, value: Optional[str]) -> "DistributionKind":
        """Parse a distribution kind, raising ConfigurationError unless exactly 'bin' or 'all'."""
        if value is None or not value.strip():
            raise ConfigurationError("is required", field="distribution")
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(
                f"Invalid distribution type: {value}. Must be 'bin' or 'all'",
                field="distribution",
            )


@dataclass(frozen=True)
class DistributionRequest:
    """One archive of one version: the unit of mirroring."""

    product: str
    version: Version
    distribution: DistributionKind

    @property
    def artifact_id(self) -> str:
        """Canonical id: download name, idempotency key and tag name."""
        return f"{self.product}-{self.version}-{self.distribution.value}"

    @property
    def archive_name(self) -> str:
        return f"{self.artifact_id}.zip"

    def coordinate(self, group_id: str) -> str:
        """Maven coordinate the publish gateway uses for this archive."""
        return f"{group_id}:{self.artifact_id}:{self.version}@zip"


@dataclass
class MirrorSettings:
    """Settings shared by every mirror run."""

    root: Path = Path(".")
    product: str = "gradle"
    group_id: str = "org.gradle"
    dist_base_url: str = DEFAULT_DIST_BASE_URL
    releases_url: str = DEFAULT_RELEASES_URL
    latest_url: str = DEFAULT_LATEST_URL
    output_dir: Optional[Path] = None
    publish_dir: Optional[Path] = None
    git_remote: Optional[str] = None
    publish_command: Optional[str] = None
    http_timeout: float = 30.0
    user_agent: str = "gradle-mirror"
    default_distribution: str = "bin"
    default_from_version: str = "8.0"

    @property
    def staging_dir(self) -> Path:
        """Where archives are downloaded to."""
        if self.output_dir is None:
            return self.root / "build" / "gradle-wrappers"
        if self.output_dir.is_absolute():
            return self.output_dir
        return self.root / self.output_dir

    @property
    def publish_location(self) -> Path:
        """Where the publish gateway picks archives up."""
        if self.publish_dir is None:
            return self.root
        if self.publish_dir.is_absolute():
            return self.publish_dir
        return self.root / self.publish_dir

    @property
    def display_product(self) -> str:
        return self.product.capitalize()

    def request(self, version: Version, distribution: DistributionKind) -> DistributionRequest:
        return DistributionRequest(
            product=self.product,
            version=version,
            distribution=distribution,
        )

    def archive_url(self, request: DistributionRequest) -> str:
        return f"{self.dist_base_url.rstrip('/')}/{request.archive_name}"

    @classmethod
    def from_env(cls, root: Optional[Path] = None) -> "MirrorSettings":
        """Parse mirror configuration from environment variables."""
        env = os.environ

        output_dir = env.get("MIRROR_OUTPUT_DIR")
        publish_dir = env.get("MIRROR_PUBLISH_DIR")

        settings = cls(
            root=root or Path.cwd(),
            product=env.get("MIRROR_PRODUCT", "gradle").strip() or "gradle",
            group_id=env.get("MIRROR_GROUP_ID", "org.gradle"),
            dist_base_url=env.get("MIRROR_DIST_BASE_URL", DEFAULT_DIST_BASE_URL),
            releases_url=env.get("MIRROR_RELEASES_URL", DEFAULT_RELEASES_URL),
            latest_url=env.get("MIRROR_LATEST_URL", DEFAULT_LATEST_URL),
            output_dir=Path(output_dir) if output_dir else None,
            publish_dir=Path(publish_dir) if publish_dir else None,
            git_remote=env.get("MIRROR_GIT_REMOTE") or None,
            publish_command=env.get("MIRROR_PUBLISH_COMMAND") or None,
            http_timeout=_float_env("MIRROR_HTTP_TIMEOUT", 30.0),
            user_agent=env.get("MIRROR_USER_AGENT", "gradle-mirror"),
            default_distribution=env.get("MIRROR_DISTRIBUTION", "bin"),
            default_from_version=env.get("MIRROR_FROM_VERSION", "8.0"),
        )

        logger.debug(
            f"Loaded mirror settings: product={settings.product}, "
            f"remote={settings.git_remote or '-'}, staging={settings.staging_dir}"
        )
        return settings


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not a number, using {default}")
        return default
    if value <= 0:
        logger.warning(f"{name} must be positive, using {default}")
        return default
    return value
