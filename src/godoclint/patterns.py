"""
godoclint pattern definitions.

The fixed rulebook text: predicate name prefixes, predicate doc phrasings
that read worse than "<Name> reports whether ...", and the directive
comment shape. Patterns are compiled once at import time and never change.

Organization:
1. PREDICATE_PREFIXES - Name prefixes that make a function read like a predicate
2. PREDICATE_ANTIPATTERNS - Doc phrasings flagged on predicates
3. DIRECTIVE - Tool/compiler directive comments (//name: value)
"""

from __future__ import annotations

import re

# =============================================================================
# 1. PREDICATE PREFIXES
# =============================================================================
# Matched in capitalized and lowercase form, followed by an uppercase letter
# or digit: IsValid, hasKey, Can2FA. Not: Issue, Hash, canary.

PREDICATE_PREFIXES: tuple[str, ...] = (
    "Has",
    "Is",
    "Contains",
    "Can",
)

_prefix_alternatives = list(PREDICATE_PREFIXES) + [p.lower() for p in PREDICATE_PREFIXES]

PREDICATE_PREFIX_RE = re.compile(
    r"(?:" + "|".join(_prefix_alternatives) + r")[A-Z0-9]\w*",
    re.ASCII,
)


# =============================================================================
# 2. PREDICATE DOC ANTI-PATTERNS
# =============================================================================
# Case-sensitive, each surrounded by single spaces.

PREDICATE_ANTIPATTERNS: tuple[str, ...] = (
    "returns true if",
    "returns false if",
    "returns true iff",
    "returns false iff",
    "returns true for",
    "returns false for",
    "returns true when",
    "returns false when",
    "tells whether",
    "tests whether",
    "determines whether",
    "indicates whether",
)

PREDICATE_ANTIPATTERN_RE = re.compile(
    "|".join(re.escape(" " + p + " ") for p in PREDICATE_ANTIPATTERNS)
)

# The canonical phrasing a predicate doc should use after the name.
PREDICATE_DOC_PHRASE = " reports whether "


# =============================================================================
# 3. DIRECTIVES
# =============================================================================
# Tool comments such as "//nolint: errcheck" are exempt from the
# leading-space rule. The shape is //<identifier>: <rest>, with no space
# after the slashes and a space after the colon.

DIRECTIVE_RE = re.compile(r"//\w+: .*", re.ASCII)


# =============================================================================
# MATCHERS
# =============================================================================

def looks_like_predicate_name(name: str) -> bool:
    """Check if an identifier begins with a predicate prefix (IsFoo, hasBar)."""
    return PREDICATE_PREFIX_RE.match(name) is not None


def find_predicate_antipattern(line: str) -> tuple[int, int] | None:
    """Return the (start, end) span of the leftmost anti-pattern phrase, or None."""
    m = PREDICATE_ANTIPATTERN_RE.search(line)
    if m is None:
        return None
    return m.span()


def is_directive(text: str) -> bool:
    """Check if a line comment is a directive comment."""
    return DIRECTIVE_RE.match(text) is not None
