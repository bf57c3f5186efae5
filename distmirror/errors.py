"""
Errors — Exception taxonomy for mirror operations.

Fatal vs. recoverable is decided per operation:

- ConfigurationError: fatal, raised before any network or git access
- DiscoveryError: recovered by the catalog fallbacks
- StateQueryError: recovered as "not mirrored yet"
- FetchError: fatal for a single version, counted in a batch
- StateRecordError: reported as a warning, the mirror still succeeds

## Usage

    from distmirror.errors import ConfigurationError, FetchError

    try:
        manager.mirror_version("8.5", "bin")
    except ConfigurationError as e:
        print(f"Bad input: {e}")
    except FetchError as e:
        print(f"Download failed: {e}")
"""

from __future__ import annotations

from typing import List, Optional


class MirrorError(Exception):
    """Base class for all mirror errors."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


class ConfigurationError(MirrorError):
    """Raised when a version or distribution is missing or malformed."""
    pass


class VersionParseError(ConfigurationError):
    """Raised when a version string does not have the x.y[.z][-qualifier] form."""

    def __init__(self, text: Optional[str]):
        self.text = text
        super().__init__(
            f"Invalid version format: {text!r}. "
            "Expected x.y[.z][-qualifier] (e.g. 8.5, 8.4.1, 7.6-rc-1)",
            field="version",
        )


class DiscoveryError(MirrorError):
    """Raised when the upstream release index cannot be read."""
    pass


class StateQueryError(MirrorError):
    """Raised when the tag store cannot be queried."""
    pass


class StateRecordError(MirrorError):
    """Raised when a tag cannot be created or pushed."""
    pass


class FetchError(MirrorError):
    """Raised when a distribution archive cannot be downloaded or written."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)

    def _format_message(self) -> str:
        if self.url:
            return f"{self.message} ({self.url})"
        return self.message


class TagStoreError(MirrorError):
    """Raised by a TagStore when a git command fails."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        stderr: Optional[str] = None,
    ):
        self.command = command or []
        self.stderr = stderr
        super().__init__(message)

    def _format_message(self) -> str:
        if self.stderr:
            return f"{self.message}: {self.stderr}"
        return self.message
