"""
Tests for predicate and directive patterns.
"""

import pytest
from godoclint.patterns import (
    PREDICATE_ANTIPATTERNS,
    find_predicate_antipattern,
    is_directive,
    looks_like_predicate_name,
)


class TestPredicateNames:
    """Test predicate-looking identifiers."""

    @pytest.mark.parametrize("name", [
        "IsValid", "isValid", "HasKey", "hasKey",
        "ContainsAll", "containsAll", "CanRead", "canRead",
        "Can2FA", "Is64Bit",
    ])
    def test_predicate_names(self, name):
        assert looks_like_predicate_name(name)

    @pytest.mark.parametrize("name", [
        "Issue", "Hash", "canary", "Contained",
        "Is", "Has", "is_valid", "ISValid",
        "ThisIsFoo", "Valid",
    ])
    def test_other_names(self, name):
        assert not looks_like_predicate_name(name)


class TestAntipatterns:
    """Test predicate doc phrasings."""

    def test_span_starts_at_leading_space(self):
        assert find_predicate_antipattern("// IsFoo returns true if x") == (8, 25)

    def test_leftmost_match(self):
        line = "// F tells whether a, and returns true if b"
        assert find_predicate_antipattern(line)[0] == 4

    @pytest.mark.parametrize("phrase", PREDICATE_ANTIPATTERNS)
    def test_every_phrase(self, phrase):
        assert find_predicate_antipattern(f"// F {phrase} x") is not None

    @pytest.mark.parametrize("line", [
        "// F reports whether x.",
        "// F Returns true if x.",
        "// F returns true if",
        "// F returns  true if x.",
        "// F returns truely if x.",
    ])
    def test_no_match(self, line):
        assert find_predicate_antipattern(line) is None


class TestDirectives:
    """Test directive comment detection."""

    @pytest.mark.parametrize("text", [
        "//nolint: errcheck",
        "//export: Foo",
        "//lint: ",
    ])
    def test_directives(self, text):
        assert is_directive(text)

    @pytest.mark.parametrize("text", [
        "// nolint: errcheck",
        "//nolint:errcheck",
        "//go:generate stringer -type=Kind",
        "//nolint",
        "//: x",
        "/*nolint: x*/",
    ])
    def test_not_directives(self, text):
        assert not is_directive(text)
