"""
Artifact Fetcher — Download one distribution archive.

The archive is streamed into the staging directory and then copied into
the publish location, where the publish gateway picks it up. There is no
retry and no resume: a failed download may leave a partial staged file
behind, and the caller must treat it as failed.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

from ..errors import FetchError
from .config import DistributionRequest, MirrorSettings

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class FetchedArtifact:
    """Where a downloaded archive ended up."""

    staged_path: Path
    publish_path: Path
    size_bytes: int


class ArtifactFetcher:
    """Streams distribution archives to disk."""

    def __init__(self, settings: MirrorSettings, client: Optional[httpx.Client] = None):
        self.settings = settings
        self._client = client

    def url_for(self, request: DistributionRequest) -> str:
        return self.settings.archive_url(request)

    def fetch(self, request: DistributionRequest) -> FetchedArtifact:
        """
        Download the archive for request.

        Raises:
            FetchError: On transport errors, non-2xx responses or disk errors
        """
        url = self.url_for(request)
        staged = self.settings.staging_dir / request.archive_name
        published = self.settings.publish_location / request.archive_name

        logger.info(f"[fetch] Downloading {self.settings.display_product} {request.version} from {url}")
        size = self._stream_to(url, staged)
        logger.info(f"[fetch] Downloaded {size} bytes to {staged}")

        try:
            published.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(staged, published)
        except OSError as e:
            raise FetchError(f"Failed to copy archive to {published}: {e}", url=url)

        return FetchedArtifact(staged_path=staged, publish_path=published, size_bytes=size)

    def _stream_to(self, url: str, target: Path) -> int:
        client = self._client or httpx.Client(
            timeout=self.settings.http_timeout,
            follow_redirects=True,
        )
        written = 0
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with client.stream(
                "GET", url, headers={"User-Agent": self.settings.user_agent}
            ) as response:
                if response.status_code == 404:
                    raise FetchError("Distribution not found", url=url)
                response.raise_for_status()
                with open(target, "wb") as f:
                    for chunk in response.iter_bytes(CHUNK_SIZE):
                        f.write(chunk)
                        written += len(chunk)
        except httpx.HTTPStatusError as e:
            raise FetchError(f"Download failed with HTTP {e.response.status_code}", url=url)
        except httpx.HTTPError as e:
            raise FetchError(f"Download failed: {e}", url=url)
        except OSError as e:
            raise FetchError(f"Failed to write {target}: {e}", url=url)
        finally:
            if self._client is None:
                client.close()

        return written
