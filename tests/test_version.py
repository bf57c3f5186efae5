"""
Tests for version parsing and ordering.
"""

import pytest

from distmirror.errors import ConfigurationError, VersionParseError
from distmirror.mirror.version import (
    ZERO,
    Ordering,
    Version,
    compare,
    is_valid,
    parse,
    parse_lenient,
)


class TestParse:
    """Tests for parse()."""

    @pytest.mark.parametrize("text,components", [
        ("8.5", (8, 5)),
        ("8.4.1", (8, 4, 1)),
        ("10.0", (10, 0)),
        (" 8.5 ", (8, 5)),
    ])
    def test_numeric_versions(self, text, components):
        assert parse(text).components == components

    def test_qualifier(self):
        version = parse("7.6-rc-1")
        assert version.components == (7, 6)
        assert version.qualifier == "rc-1"

    def test_str_round_trips_text(self):
        assert str(parse("7.6-rc-1")) == "7.6-rc-1"
        assert str(parse("8.4.1")) == "8.4.1"

    def test_str_without_text(self):
        assert str(Version(components=(8, 5), qualifier="milestone-2")) == "8.5-milestone-2"

    @pytest.mark.parametrize("text", ["v8", "8", "8.5.1.2", "", "8.x", "8.5-", "latest", "8.5 rc"])
    def test_rejects_malformed(self, text):
        with pytest.raises(VersionParseError) as exc_info:
            parse(text)
        assert exc_info.value.text == text

    def test_rejects_none(self):
        with pytest.raises(VersionParseError):
            parse(None)

    def test_parse_error_is_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse("v8")
        assert "v8" in str(exc_info.value)


class TestLenientParse:
    """Tests for parse_lenient() and is_valid()."""

    def test_valid_text_parses_normally(self):
        assert parse_lenient("8.5").components == (8, 5)

    def test_invalid_text_is_zero(self):
        assert parse_lenient("nightly") == ZERO
        assert parse_lenient(None) == ZERO

    def test_is_valid(self):
        assert is_valid("8.5")
        assert is_valid("7.6-rc-1")
        assert not is_valid("v8")
        assert not is_valid(None)


class TestCompare:
    """Tests for compare() and the rich comparison operators."""

    VERSIONS = ["7.6", "7.6-rc-1", "8.0", "8.0.1", "8.1", "8.5", "8.5.0", "8.10", "9.0"]

    def test_reflexive(self):
        for text in self.VERSIONS:
            assert compare(parse(text), parse(text)) is Ordering.EQUAL

    def test_antisymmetric(self):
        flipped = {Ordering.LESS: Ordering.GREATER, Ordering.GREATER: Ordering.LESS, Ordering.EQUAL: Ordering.EQUAL}
        for a in self.VERSIONS:
            for b in self.VERSIONS:
                assert compare(parse(b), parse(a)) is flipped[compare(parse(a), parse(b))]

    def test_transitive(self):
        versions = [parse(t) for t in self.VERSIONS]
        for a in versions:
            for b in versions:
                for c in versions:
                    if a <= b and b <= c:
                        assert a <= c

    def test_padding_law(self):
        assert compare(parse("8.5"), parse("8.5.0")) is Ordering.EQUAL
        assert parse("8.5") == parse("8.5.0")
        assert hash(parse("8.5")) == hash(parse("8.5.0"))

    def test_qualifier_ignored(self):
        assert compare(parse("7.6-rc-1"), parse("7.6")) is Ordering.EQUAL

    def test_numeric_not_lexicographic(self):
        assert compare(parse("8.10"), parse("8.9")) is Ordering.GREATER
        assert parse("8.9") < parse("8.10")

    def test_patch_ordering(self):
        assert compare(parse("8.0"), parse("8.0.1")) is Ordering.LESS
        assert compare(parse("8.0.1"), parse("8.1")) is Ordering.LESS

    def test_sorted(self):
        texts = ["9.0", "8.0.1", "8.10", "8.0", "8.9"]
        assert [str(v) for v in sorted(parse(t) for t in texts)] == ["8.0", "8.0.1", "8.9", "8.10", "9.0"]

    def test_not_equal_to_other_types(self):
        assert parse("8.5") != "8.5"

    def test_immutable(self):
        version = parse("8.5")
        with pytest.raises(AttributeError):
            version.components = (9, 0)
