"""
Shared fixtures for mirror tests.

Provides settings rooted in a temporary directory, a fake upstream served
through httpx.MockTransport, and a MirrorManager wired to in-memory
collaborators so nothing touches the network or a real git repository.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Optional

import httpx
import pytest

from distmirror.mirror.catalog import VersionCatalog
from distmirror.mirror.config import MirrorSettings
from distmirror.mirror.fetcher import ArtifactFetcher
from distmirror.mirror.manager import MirrorManager
from distmirror.mirror.mock import InMemoryTagStore, RecordingPublishGateway
from distmirror.mirror.state import MirrorStateStore

DIST_BASE_URL = "https://dist.example.test/distributions"
RELEASES_URL = "https://api.example.test/repos/gradle/gradle/releases"
LATEST_URL = "https://api.example.test/repos/gradle/gradle/releases/latest"


class FakeUpstream:
    """Serves a release index and distribution archives from memory."""

    def __init__(
        self,
        tags: Iterable[str] = (),
        latest: str = "v8.5.0",
        missing: Iterable[str] = (),
        broken: bool = False,
        interrupted: Iterable[str] = (),
    ):
        self.tags = list(tags)
        self.latest = latest
        self.missing = set(missing)
        self.interrupted = set(interrupted)
        self.broken = broken
        self.requests: List[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)

        if self.broken:
            raise httpx.ConnectError("connection refused", request=request)
        if url == RELEASES_URL:
            return httpx.Response(200, json=[{"tag_name": t, "draft": False} for t in self.tags])
        if url == LATEST_URL:
            return httpx.Response(200, json={"tag_name": self.latest})
        if url.startswith(DIST_BASE_URL):
            name = url.rsplit("/", 1)[-1]
            if name in self.missing:
                return httpx.Response(404)
            if name in self.interrupted:
                return httpx.Response(200, content=_cut_off(archive_bytes(name)))
            return httpx.Response(200, content=archive_bytes(name))
        return httpx.Response(404)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    @property
    def archive_requests(self) -> List[str]:
        return [u for u in self.requests if u.startswith(DIST_BASE_URL)]


def archive_bytes(name: str) -> bytes:
    """Deterministic fake archive content for a file name."""
    return b"PK\x03\x04" + name.encode() * 100


def _cut_off(data: bytes) -> Iterator[bytes]:
    """Yield the first half of data, then drop the connection."""
    yield data[: len(data) // 2]
    raise httpx.ReadError("connection reset by peer")


def make_manager(
    settings: MirrorSettings,
    upstream: FakeUpstream,
    tags: Optional[InMemoryTagStore] = None,
    publisher: Optional[RecordingPublishGateway] = None,
) -> MirrorManager:
    client = upstream.client()
    return MirrorManager(
        settings=settings,
        catalog=VersionCatalog(settings, client=client),
        state=MirrorStateStore(tags or InMemoryTagStore()),
        fetcher=ArtifactFetcher(settings, client=client),
        publisher=publisher or RecordingPublishGateway(),
    )


@pytest.fixture
def settings(tmp_path: Path) -> MirrorSettings:
    """Settings pointing at the fake upstream and a temp project root."""
    return MirrorSettings(
        root=tmp_path,
        dist_base_url=DIST_BASE_URL,
        releases_url=RELEASES_URL,
        latest_url=LATEST_URL,
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    """Upstream with a handful of releases, most recent first."""
    return FakeUpstream(tags=["v9.0.0", "v8.10.2", "v8.2.1", "v8.2.0", "v8.1.1", "v8.1.0", "v8.0.0"])


@pytest.fixture
def tag_store() -> InMemoryTagStore:
    return InMemoryTagStore()


@pytest.fixture
def publisher() -> RecordingPublishGateway:
    return RecordingPublishGateway()


@pytest.fixture
def manager(settings, upstream, tag_store, publisher) -> MirrorManager:
    return make_manager(settings, upstream, tag_store, publisher)
