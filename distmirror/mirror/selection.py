"""
Version Selection — Pick the catalog entries a batch run should mirror.
"""

from __future__ import annotations

from typing import Iterable, List

from .version import Ordering, Version, compare, parse_lenient


def select_from(catalog: Iterable[str], floor: str) -> List[Version]:
    """
    Return every catalog version at or above floor, sorted ascending.

    Entries are parsed leniently: anything unparseable counts as version 0.
    The sort is stable, so versions that compare equal keep catalog order.
    """
    floor_version = parse_lenient(floor)

    selected = [
        version
        for version in (parse_lenient(entry) for entry in catalog)
        if compare(version, floor_version) is not Ordering.LESS
    ]
    return sorted(selected)
