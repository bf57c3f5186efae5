"""
Tests for batch version selection.
"""

from distmirror.mirror.selection import select_from
from distmirror.mirror.version import Ordering, compare


def _texts(versions):
    return [str(v) for v in versions]


class TestSelectFrom:

    def test_floor_is_inclusive(self):
        assert _texts(select_from(["8.0", "8.1", "8.0.1", "9.0"], "8.1")) == ["8.1", "9.0"]

    def test_sorts_ascending_regardless_of_upstream_order(self):
        catalog = ["9.0", "8.10", "8.2.1", "8.9", "8.0"]
        assert _texts(select_from(catalog, "8.0")) == ["8.0", "8.2.1", "8.9", "8.10", "9.0"]

    def test_output_is_strictly_ascending(self):
        result = select_from(["8.1.1", "8.0", "9.0", "8.4", "8.0.2"], "0.0")
        for left, right in zip(result, result[1:]):
            assert compare(left, right) is Ordering.LESS

    def test_floor_with_patch(self):
        assert _texts(select_from(["8.0", "8.0.1", "8.0.2", "8.1"], "8.0.1")) == ["8.0.1", "8.0.2", "8.1"]

    def test_floor_padding(self):
        assert _texts(select_from(["8.5", "8.4"], "8.5.0")) == ["8.5"]

    def test_floor_above_everything(self):
        assert select_from(["8.0", "8.1"], "10.0") == []

    def test_empty_catalog(self):
        assert select_from([], "8.0") == []

    def test_invalid_entries_count_as_zero(self):
        assert _texts(select_from(["nightly", "8.0"], "8.0")) == ["8.0"]
        assert _texts(select_from(["nightly", "8.0"], "0")) == ["0", "8.0"]

    def test_invalid_floor_counts_as_zero(self):
        assert _texts(select_from(["8.1", "8.0"], "latest")) == ["8.0", "8.1"]

    def test_equal_versions_keep_catalog_order(self):
        result = select_from(["8.5.0", "8.4", "8.5"], "8.0")
        assert _texts(result) == ["8.4", "8.5.0", "8.5"]
