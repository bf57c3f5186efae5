"""
Version — Parse and order dotted release identifiers.

Versions look like ``8.5``, ``8.4.1`` or ``7.6-rc-1``. Ordering pads the
shorter component tuple with zeros and compares left to right, so
``8.5 == 8.5.0``. The qualifier is carried along for display and URLs but
does not take part in ordering.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from itertools import zip_longest
from typing import Optional, Tuple

from ..errors import VersionParseError

VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?((?:-[A-Za-z0-9]+)*)$")


class Ordering(Enum):
    """Result of comparing two versions."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """An immutable release identifier."""

    components: Tuple[int, ...]
    qualifier: Optional[str] = None
    text: str = field(default="", compare=False)

    def __str__(self) -> str:
        if self.text:
            return self.text
        base = ".".join(str(c) for c in self.components)
        if self.qualifier:
            return f"{base}-{self.qualifier}"
        return base

    def __repr__(self) -> str:
        return f"Version({str(self)!r})"

    def _key(self) -> Tuple[int, ...]:
        # Trailing zeros are insignificant under the padding law
        parts = list(self.components)
        while parts and parts[-1] == 0:
            parts.pop()
        return tuple(parts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) is Ordering.EQUAL

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) is Ordering.LESS

    def __hash__(self) -> int:
        return hash(self._key())


ZERO = Version(components=(0,), text="0")


def parse(text: Optional[str]) -> Version:
    """
    Parse a version string.

    Raises:
        VersionParseError: If the text is missing or not x.y[.z][-qualifier]
    """
    if text is None:
        raise VersionParseError(text)

    stripped = text.strip()
    match = VERSION_PATTERN.match(stripped)
    if not match:
        raise VersionParseError(text)

    major, minor, patch, suffix = match.groups()
    components = [int(major), int(minor)]
    if patch is not None:
        components.append(int(patch))

    return Version(
        components=tuple(components),
        qualifier=suffix[1:] if suffix else None,
        text=stripped,
    )


def parse_lenient(text: Optional[str]) -> Version:
    """Parse a version, treating anything unparseable as version 0."""
    try:
        return parse(text)
    except VersionParseError:
        return ZERO


def is_valid(text: Optional[str]) -> bool:
    """Check whether text is a well-formed version string."""
    if text is None:
        return False
    return VERSION_PATTERN.match(text.strip()) is not None


def compare(a: Version, b: Version) -> Ordering:
    """Compare two versions component-wise, ignoring qualifiers."""
    for left, right in zip_longest(a.components, b.components, fillvalue=0):
        if left < right:
            return Ordering.LESS
        if left > right:
            return Ordering.GREATER
    return Ordering.EQUAL
