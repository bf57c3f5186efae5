"""
Mirror State — Track which archives have already been mirrored.

State lives entirely in the tag store: a tag named after the artifact id
means the archive was mirrored. Query failures are reported as "not
mirrored" so a flaky git call leads to redoing work rather than skipping it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..errors import StateQueryError, StateRecordError, TagStoreError
from .git_tags import TagStore

logger = logging.getLogger(__name__)


@dataclass
class RecordOutcome:
    """Result of recording a mirrored archive."""

    tagged: bool = False
    pushed: Optional[bool] = None  # None when no remote is configured
    errors: List[StateRecordError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.tagged and self.pushed is not False

    @property
    def warnings(self) -> List[str]:
        return [str(e) for e in self.errors]


class MirrorStateStore:
    """Idempotency oracle on top of a TagStore."""

    def __init__(self, tags: TagStore):
        self.tags = tags

    def exists(self, key: str) -> bool:
        """Check whether a tag named key exists. Any query failure counts as absent."""
        try:
            found = key in self.tags.list_tags(key)
        except Exception as e:
            error = StateQueryError(f"Could not check git tags for '{key}': {e}")
            logger.warning(f"[mirror-state] {error}")
            return False

        if found:
            logger.info(f"[mirror-state] Tag '{key}' exists")
        else:
            logger.debug(f"[mirror-state] Tag '{key}' does not exist")
        return found

    def record(self, key: str, message: str) -> RecordOutcome:
        """
        Create the tag for key and push it if a remote is configured.

        Never raises; failures are returned in the outcome.
        """
        outcome = RecordOutcome()

        try:
            self.tags.create_tag(key, message)
        except TagStoreError as e:
            outcome.errors.append(StateRecordError(f"Failed to create git tag '{key}': {e}"))
            logger.warning(f"[mirror-state] {outcome.errors[-1]}")
            return outcome

        outcome.tagged = True
        logger.info(f"[mirror-state] Created git tag: {key}")

        if not self.tags.can_push:
            return outcome

        try:
            self.tags.push_tag(key)
            outcome.pushed = True
            logger.info(f"[mirror-state] Pushed tag '{key}' to remote")
        except TagStoreError as e:
            outcome.pushed = False
            outcome.errors.append(StateRecordError(f"Failed to push git tag '{key}': {e}"))
            logger.warning(f"[mirror-state] {outcome.errors[-1]}")

        return outcome
