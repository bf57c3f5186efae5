"""
Git Tags — Tag store backed by the local git repository.

A tag named after an artifact id is the durable record that the archive
has been mirrored. Tags can optionally be pushed to a configured remote.
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from ..errors import TagStoreError

logger = logging.getLogger(__name__)


class TagStore(ABC):
    """Interface for the external tag namespace."""

    @property
    @abstractmethod
    def can_push(self) -> bool:
        """Whether a remote is configured for push_tag()."""
        pass

    @abstractmethod
    def list_tags(self, name: str) -> List[str]:
        """List tags matching name exactly."""
        pass

    @abstractmethod
    def create_tag(self, name: str, message: str) -> None:
        """Create an annotated tag."""
        pass

    @abstractmethod
    def push_tag(self, name: str) -> None:
        """Push a tag to the configured remote."""
        pass


class GitTagStore(TagStore):
    """
    Runs git in the project root.

    Every command failure (non-zero exit, missing git binary, timeout)
    is raised as TagStoreError.
    """

    def __init__(self, repo_root: Path, remote: Optional[str] = None, timeout: int = 10):
        self.repo_root = repo_root
        self.remote = remote
        self.timeout = timeout

    @property
    def can_push(self) -> bool:
        return bool(self.remote)

    def list_tags(self, name: str) -> List[str]:
        result = self._git(["tag", "-l", name])
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def create_tag(self, name: str, message: str) -> None:
        logger.info(f"[mirror-git] Creating git tag '{name}'")
        self._git(["tag", "-a", name, "-m", message])

    def push_tag(self, name: str) -> None:
        if not self.remote:
            raise TagStoreError(f"No remote configured to push '{name}'")
        logger.info(f"[mirror-git] Pushing tag '{name}' to {self.remote}")
        self._git(["push", self.remote, name], timeout=60)

    def _git(self, args: List[str], timeout: Optional[int] = None) -> subprocess.CompletedProcess:
        cmd = ["git"] + args
        try:
            result = subprocess.run(
                cmd,
                cwd=str(self.repo_root),
                capture_output=True,
                text=True,
                timeout=timeout or self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise TagStoreError(f"git {args[0]} could not run", command=cmd, stderr=str(e))

        if result.returncode != 0:
            error = result.stderr.strip() or result.stdout.strip() or f"exit code {result.returncode}"
            raise TagStoreError(f"git {args[0]} failed", command=cmd, stderr=error)

        return result
