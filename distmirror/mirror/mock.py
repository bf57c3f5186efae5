"""
Mock Collaborators — In-memory tag store and publish gateway.

These keep everything in memory so the manager can run in tests without
git or a build tool.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple

from ..errors import TagStoreError
from .config import DistributionRequest
from .fetcher import FetchedArtifact
from .git_tags import TagStore
from .publish import PublishGateway

logger = logging.getLogger(__name__)


class InMemoryTagStore(TagStore):
    """
    Tag store backed by a set.

    Failures can be injected per operation to exercise error paths.
    """

    def __init__(
        self,
        tags: Optional[Set[str]] = None,
        remote: Optional[str] = None,
        fail_list: bool = False,
        fail_create: bool = False,
        fail_push: bool = False,
    ):
        self.tags: Set[str] = set(tags or ())
        self.messages: dict = {}
        self.pushed: List[str] = []
        self.remote = remote
        self.fail_list = fail_list
        self.fail_create = fail_create
        self.fail_push = fail_push

    @property
    def can_push(self) -> bool:
        return bool(self.remote)

    def list_tags(self, name: str) -> List[str]:
        if self.fail_list:
            raise TagStoreError("git tag failed", stderr="simulated list failure")
        return [name] if name in self.tags else []

    def create_tag(self, name: str, message: str) -> None:
        if self.fail_create:
            raise TagStoreError("git tag failed", stderr="simulated create failure")
        if name in self.tags:
            raise TagStoreError("git tag failed", stderr=f"tag '{name}' already exists")
        self.tags.add(name)
        self.messages[name] = message
        logger.info(f"[MOCK:tags] Created tag '{name}'")

    def push_tag(self, name: str) -> None:
        if self.fail_push:
            raise TagStoreError("git push failed", stderr="simulated push failure")
        self.pushed.append(name)
        logger.info(f"[MOCK:tags] Pushed tag '{name}' to {self.remote}")


class RecordingPublishGateway(PublishGateway):
    """Remembers every publish call instead of running a build."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.calls: List[Tuple[DistributionRequest, FetchedArtifact]] = []

    def publish(self, request: DistributionRequest, artifact: FetchedArtifact) -> bool:
        self.calls.append((request, artifact))
        logger.info(f"[MOCK:publish] Would publish {artifact.publish_path.name}")
        return self.succeed
