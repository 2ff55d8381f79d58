"""
Doc-comment Rules

Function-level rules run once per documented function declaration and
receive an explicit FuncContext naming the function being checked. The
package-level rule runs once per package before any function is checked.

Every rule is a pure function of its input and returns a list of findings;
the linter engine owns reporting.
"""

import unicodedata
from dataclasses import dataclass
from pathlib import PurePath
from typing import List, Optional

from godoclint.classify import is_predicate
from godoclint.config import LintConfig
from godoclint.parser import Comment, CommentGroup, FuncDecl, Package
from godoclint.patterns import (
    PREDICATE_DOC_PHRASE,
    find_predicate_antipattern,
    is_directive,
    looks_like_predicate_name,
)
from godoclint.reporting import Finding


MSG_BAD_PREDICATE = "bad predicate comment"
MSG_BLOCK_COMMENT = "should not use block comments in doc-comments"
MSG_NO_PUNCT = "doc-comment should end with punctuation, usually with period"
MSG_NO_SPACE = "found comment without leading space and it's not a directive"
MSG_NO_PACKAGE_DOC = "no doc-comment found"
MSG_MANY_PACKAGE_DOCS = "found {count} doc-comments, expected 1"
MSG_LONG_PACKAGE_DOC = "long doc-comments should go into the dedicated doc file"

# Offset of an anti-pattern phrase from the end of the function name that
# counts as describing the function itself: MIN < offset <= MAX.
# Heuristic window, not calibrated against real code.
ANTIPATTERN_MIN_OFFSET = 1
ANTIPATTERN_MAX_OFFSET = 4


# ============================================================================
# CONTEXTS
# ============================================================================

@dataclass(frozen=True)
class FuncContext:
    """The function currently being checked and the file it lives in."""
    filename: str
    decl: FuncDecl

    @property
    def doc(self) -> CommentGroup:
        return self.decl.doc

    @property
    def name(self) -> str:
        return self.decl.name.name

    @property
    def anchor(self) -> str:
        """`file:line:column` of the func keyword; the column counts bytes, as in Go."""
        return f"{self.filename}:{self.decl.line}:{self.decl.column}"

    def finding(self, rule_id: str, message: str) -> Finding:
        return Finding(
            rule_id=rule_id,
            anchor=self.anchor,
            message=message,
            path=self.filename,
            line=self.decl.line,
            col=self.decl.column,
            symbol=self.name,
        )


@dataclass(frozen=True)
class PackageContext:
    """A package being checked, the directory it came from, and settings."""
    path: str
    package: Package
    config: LintConfig

    def finding(self, rule_id: str, message: str, filename: str = "") -> Finding:
        # Package-wide findings point at the directory, file findings at the file
        return Finding(
            rule_id=rule_id,
            anchor=filename or self.path,
            message=message,
            path=filename or self.path,
            symbol=self.package.name,
        )


# ============================================================================
# FUNCTION RULES
# ============================================================================

class CommentRule:
    """Base class for doc-comment rules."""

    code: str = "D000"

    def check(self, ctx: FuncContext) -> List[Finding]:
        """Check a documented function and return any findings."""
        raise NotImplementedError


class PredicateDocRule(CommentRule):
    """
    Predicates should be documented as "<Name> reports whether ...".

    Two independent checks on the first doc line of a predicate:
    1. A phrase such as "returns true if" placed right after the name.
    2. A predicate-looking name (IsFoo, hasBar) without the
       "<Name> reports whether " phrasing.
    """

    code = "D001"

    def check(self, ctx: FuncContext) -> List[Finding]:
        if not is_predicate(ctx.decl):
            return []

        issues = []
        line = ctx.doc.first.text
        name = ctx.name

        span = find_predicate_antipattern(line)
        if span is not None:
            offset = span[0] - len(name)
            if ANTIPATTERN_MIN_OFFSET < offset <= ANTIPATTERN_MAX_OFFSET:
                issues.append(ctx.finding(self.code, MSG_BAD_PREDICATE))

        if looks_like_predicate_name(name):
            if name + PREDICATE_DOC_PHRASE not in line:
                issues.append(ctx.finding(self.code, MSG_BAD_PREDICATE))

        return issues


class NoBlockCommentRule(CommentRule):
    """Doc-comments should be // comments. Reported once per doc-comment."""

    code = "D002"

    def check(self, ctx: FuncContext) -> List[Finding]:
        for comment in ctx.doc:
            if comment.is_block:
                return [ctx.finding(self.code, MSG_BLOCK_COMMENT)]
        return []


def ends_with_punctuation(text: str) -> bool:
    """Check if the last character has a Unicode punctuation category (P*)."""
    return bool(text) and unicodedata.category(text[-1]).startswith("P")


class EndsWithPunctRule(CommentRule):
    """
    One-line doc-comments should end with punctuation.

    Only a doc made of a single // comment is checked; longer docs and block
    comments are skipped to stay clear of false positives.
    """

    code = "D003"

    def check(self, ctx: FuncContext) -> List[Finding]:
        doc = ctx.doc
        if len(doc) != 1 or doc.first.is_block:
            return []
        if not ends_with_punctuation(doc.first.text):
            return [ctx.finding(self.code, MSG_NO_PUNCT)]
        return []


def has_leading_space(comment: Comment) -> bool:
    return comment.text.startswith("// ") or comment.text.startswith("//\t")


class LeadingSpaceRule(CommentRule):
    """Each // line must start with "// " or "//<tab>", unless it is a directive."""

    code = "D004"

    def check(self, ctx: FuncContext) -> List[Finding]:
        issues = []
        for comment in ctx.doc:
            if comment.is_block or is_directive(comment.text):
                continue
            if not has_leading_space(comment):
                issues.append(ctx.finding(self.code, MSG_NO_SPACE))
        return issues


DEFAULT_COMMENT_RULES = (
    PredicateDocRule,
    NoBlockCommentRule,
    EndsWithPunctRule,
    LeadingSpaceRule,
)


def check_comment(ctx: FuncContext, rules: Optional[List[CommentRule]] = None) -> List[Finding]:
    """Run every comment rule against one documented function."""
    if rules is None:
        rules = [rule() for rule in DEFAULT_COMMENT_RULES]
    issues: List[Finding] = []
    for rule in rules:
        issues.extend(rule.check(ctx))
    return issues


# ============================================================================
# PACKAGE RULES
# ============================================================================

class PackageDocRule:
    """
    Exactly one file per package carries the package doc-comment, and a
    long one lives in the dedicated doc file.
    """

    code_missing = "P001"
    code_many = "P002"
    code_long = "P003"

    def check(self, ctx: PackageContext) -> List[Finding]:
        documented = [(name, f.doc) for name, f in ctx.package.files.items() if f.doc is not None]

        if not documented:
            return [ctx.finding(self.code_missing, MSG_NO_PACKAGE_DOC)]
        if len(documented) > 1:
            message = MSG_MANY_PACKAGE_DOCS.format(count=len(documented))
            return [ctx.finding(self.code_many, message)]

        if ctx.package.name == ctx.config.entry_package:
            return []

        doc_filename, doc = documented[0]
        lines = doc.line_count()
        if lines > ctx.config.max_package_doc_lines and PurePath(doc_filename).name != ctx.config.doc_file_name:
            return [ctx.finding(self.code_long, MSG_LONG_PACKAGE_DOC, filename=doc_filename)]
        return []
