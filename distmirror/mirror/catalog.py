"""
Version Catalog — Discover which releases exist upstream.

Reads the GitHub releases API and extracts every ``"tag_name"`` field.
Discovery favours availability over freshness: when the index cannot be
read, a fixed list of known versions (or a fixed latest version) is used
instead and the run continues.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

import httpx

from ..errors import DiscoveryError, VersionParseError
from .config import MirrorSettings
from .version import Version, parse

logger = logging.getLogger(__name__)

TAG_NAME_PATTERN = re.compile(r'"tag_name"\s*:\s*"[^\d"]?([^"]+)"')
STABLE_PATTERN = re.compile(r"^\d+\.\d+(\.\d+)?$")

FALLBACK_VERSIONS = [
    "8.0", "8.0.1", "8.0.2", "8.1", "8.1.1", "8.2", "8.2.1", "8.3",
    "8.4", "8.5", "8.6", "8.7", "8.8", "8.9", "8.10", "9.0",
]
FALLBACK_LATEST = "8.5"


def normalize_tag(tag: str) -> str:
    """Rewrite 8.6.0 as 8.6 to match distribution file names."""
    if tag.count(".") == 2 and tag.endswith(".0"):
        return tag[: -len(".0")]
    return tag


def extract_versions(body: str) -> List[str]:
    """
    Extract stable version names from a release index document.

    Keeps only major.minor[.patch] tags, normalizes a trailing .0 patch
    and drops duplicates while preserving upstream order.
    """
    seen = set()
    versions: List[str] = []
    for match in TAG_NAME_PATTERN.finditer(body):
        tag = match.group(1).strip()
        if not STABLE_PATTERN.match(tag):
            continue
        name = normalize_tag(tag)
        if name in seen:
            continue
        seen.add(name)
        versions.append(name)
    return versions


class VersionCatalog:
    """
    Queries the upstream release index.

    Every call performs a fresh request; nothing is cached between runs.
    """

    def __init__(
        self,
        settings: MirrorSettings,
        client: Optional[httpx.Client] = None,
        fallback_versions: Optional[Iterable[str]] = None,
        fallback_latest: str = FALLBACK_LATEST,
    ):
        self.settings = settings
        self._client = client
        self.fallback_versions = list(fallback_versions or FALLBACK_VERSIONS)
        self.fallback_latest = fallback_latest

    def list_available(self) -> List[str]:
        """Return upstream version names, or the fallback list on failure."""
        try:
            versions = self._fetch_versions()
        except DiscoveryError as e:
            logger.warning(f"[catalog] {e}, using fallback list")
            return list(self.fallback_versions)

        logger.info(f"[catalog] Found {len(versions)} {self.settings.display_product} versions")
        return versions

    def latest(self) -> Version:
        """Return the most recent upstream release, or the fallback version."""
        try:
            version = self._fetch_latest()
        except DiscoveryError as e:
            logger.warning(
                f"[catalog] {e}, falling back to {self.fallback_latest}"
            )
            return parse(self.fallback_latest)

        logger.info(f"[catalog] Latest {self.settings.display_product} version: {version}")
        return version

    # ─── HTTP ───────────────────────────────────────────────

    def _fetch_versions(self) -> List[str]:
        logger.info(f"[catalog] Fetching versions from {self.settings.releases_url}")
        body = self._get(self.settings.releases_url)
        versions = extract_versions(body)
        if not versions:
            raise DiscoveryError("Release index contained no usable tag names")
        return versions

    def _fetch_latest(self) -> Version:
        logger.info(f"[catalog] Fetching latest release from {self.settings.latest_url}")
        body = self._get(self.settings.latest_url)
        match = TAG_NAME_PATTERN.search(body)
        if not match:
            raise DiscoveryError("Could not find tag_name in latest release response")
        try:
            return parse(normalize_tag(match.group(1).strip()))
        except VersionParseError as e:
            raise DiscoveryError(f"Latest release tag is not a version: {e.text!r}")

    def _get(self, url: str) -> str:
        client = self._client or httpx.Client(
            timeout=self.settings.http_timeout,
            follow_redirects=True,
        )
        try:
            response = client.get(
                url,
                headers={
                    "Accept": "application/json",
                    "User-Agent": self.settings.user_agent,
                },
            )
            response.raise_for_status()
            return response.text
        except httpx.HTTPStatusError as e:
            raise DiscoveryError(
                f"Release index returned HTTP {e.response.status_code}"
            )
        except httpx.HTTPError as e:
            raise DiscoveryError(f"Failed to fetch release index: {e}")
        finally:
            if self._client is None:
                client.close()
