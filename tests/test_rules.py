"""
Tests for the doc-comment rules.
"""

import pytest
from godoclint.config import LintConfig
from godoclint.rules import (
    MSG_BAD_PREDICATE,
    MSG_BLOCK_COMMENT,
    MSG_LONG_PACKAGE_DOC,
    MSG_NO_PACKAGE_DOC,
    MSG_NO_PUNCT,
    MSG_NO_SPACE,
    EndsWithPunctRule,
    LeadingSpaceRule,
    NoBlockCommentRule,
    PackageContext,
    PackageDocRule,
    PredicateDocRule,
    check_comment,
    ends_with_punctuation,
)

from conftest import func_context, long_doc, make_package


def predicate(doc: str, name: str = "F") -> str:
    """Source for a documented predicate."""
    return f"{doc}\nfunc {name}() (ok bool) {{ return }}\n"


def plain(doc: str, name: str = "F") -> str:
    """Source for a documented non-predicate."""
    return f"{doc}\nfunc {name}() {{}}\n"


def messages(findings):
    return [f.message for f in findings]


# =============================================================================
# PREDICATE RULE
# =============================================================================

class TestPredicateDocRule:
    """Test predicate doc-comment phrasing."""

    rule = PredicateDocRule()

    def test_antipattern_and_name(self):
        ctx = func_context(predicate("// IsFoo returns true if foo.", "IsFoo"))
        assert messages(self.rule.check(ctx)) == [MSG_BAD_PREDICATE, MSG_BAD_PREDICATE]

    def test_antipattern_only(self):
        ctx = func_context(predicate("// Valid returns true if ok.", "Valid"))
        assert messages(self.rule.check(ctx)) == [MSG_BAD_PREDICATE]

    def test_antipattern_far_from_name(self):
        ctx = func_context(predicate("// The Valid func returns true if ok.", "Valid"))
        assert self.rule.check(ctx) == []

    def test_antipattern_without_space(self):
        # offset 2 from the end of "Valid"
        ctx = func_context(predicate("//Valid returns true if x.", "Valid"))
        assert len(self.rule.check(ctx)) == 1

    @pytest.mark.parametrize("doc,name,flagged", [
        ("// Ok returns true if x.", "Okay", False),  # offset 1
        ("// Ok returns true if x.", "Ok", True),  # offset 3
        ("//  Ok returns true if x.", "Ok", True),  # offset 4
        ("// A Ok returns true if x.", "Ok", False),  # offset 5
    ])
    def test_offset_window(self, doc, name, flagged):
        ctx = func_context(predicate(doc, name))
        assert bool(self.rule.check(ctx)) is flagged

    def test_only_first_line_checked(self):
        ctx = func_context(predicate("// Valid reports whether ok.\n// Valid returns true if ok.", "Valid"))
        assert self.rule.check(ctx) == []

    def test_reports_whether(self):
        ctx = func_context(predicate("// HasFoo reports whether foo holds.", "HasFoo"))
        assert self.rule.check(ctx) == []

    def test_predicate_name_without_phrase(self):
        ctx = func_context(predicate("// HasFoo checks foo.", "HasFoo"))
        assert messages(self.rule.check(ctx)) == [MSG_BAD_PREDICATE]

    def test_lowercase_predicate_name(self):
        ctx = func_context(predicate("// isFoo checks foo.", "isFoo"))
        assert len(self.rule.check(ctx)) == 1

    def test_non_predicate_ignored(self):
        ctx = func_context("// IsFoo returns true if foo.\nfunc IsFoo() bool { return true }\n")
        assert self.rule.check(ctx) == []

    def test_method(self):
        ctx = func_context("// Has returns true if x is in s.\nfunc (s *Set) Has(x int) (ok bool) { return }\n")
        assert messages(self.rule.check(ctx)) == [MSG_BAD_PREDICATE]

    def test_finding_fields(self):
        ctx = func_context(predicate("// IsFoo checks foo.", "IsFoo"), filename="pkg/foo.go")
        finding = self.rule.check(ctx)[0]
        assert finding.rule_id == "D001"
        assert finding.anchor == "pkg/foo.go:4:1"
        assert finding.symbol == "IsFoo"
        assert str(finding) == "pkg/foo.go:4:1: bad predicate comment"


# =============================================================================
# BLOCK COMMENT RULE
# =============================================================================

class TestNoBlockCommentRule:
    """Test the block comment rule."""

    rule = NoBlockCommentRule()

    def test_block_doc(self):
        ctx = func_context(plain("/* F does things. */"))
        assert messages(self.rule.check(ctx)) == [MSG_BLOCK_COMMENT]

    def test_reported_once(self):
        ctx = func_context(plain("/* F does */\n/* things. */"))
        assert len(self.rule.check(ctx)) == 1

    def test_mixed_group(self):
        ctx = func_context(plain("// F does\n/* things. */"))
        assert len(self.rule.check(ctx)) == 1

    def test_line_doc(self):
        assert self.rule.check(func_context(plain("// F does things."))) == []


# =============================================================================
# PUNCTUATION RULE
# =============================================================================

class TestEndsWithPunctRule:
    """Test the trailing punctuation rule."""

    rule = EndsWithPunctRule()

    @pytest.mark.parametrize("doc", [
        "// F does things.",
        "// F does things!",
        "// F does things (mostly)",
        "// F does things »",
        "// F does things…",
        "//",
    ])
    def test_punctuated(self, doc):
        assert self.rule.check(func_context(plain(doc))) == []

    @pytest.mark.parametrize("doc", [
        "// F does things",
        "// F costs $",
        "// F adds a +",
        "// F does things. ",
        "// F returns 42",
    ])
    def test_not_punctuated(self, doc):
        assert messages(self.rule.check(func_context(plain(doc)))) == [MSG_NO_PUNCT]

    def test_multi_line_skipped(self):
        assert self.rule.check(func_context(plain("// F does\n// things"))) == []

    def test_block_skipped(self):
        assert self.rule.check(func_context(plain("/* F does things */"))) == []

    def test_ends_with_punctuation(self):
        assert ends_with_punctuation("a.")
        assert ends_with_punctuation("a。")
        assert not ends_with_punctuation("a")
        assert not ends_with_punctuation("")


# =============================================================================
# LEADING SPACE RULE
# =============================================================================

class TestLeadingSpaceRule:
    """Test the leading space rule."""

    rule = LeadingSpaceRule()

    @pytest.mark.parametrize("doc", [
        "// F does things.",
        "//\tF does things.",
        "//nolint: errcheck",
        "/*F does things.*/",
    ])
    def test_accepted(self, doc):
        assert self.rule.check(func_context(plain(doc))) == []

    def test_missing_space(self):
        ctx = func_context(plain("//F does things."))
        assert messages(self.rule.check(ctx)) == [MSG_NO_SPACE]

    def test_each_line_checked(self):
        ctx = func_context(plain("//F does\n// some\n//things."))
        assert len(self.rule.check(ctx)) == 2

    def test_bare_slashes_flagged(self):
        ctx = func_context(plain("// F does things.\n//\n// More."))
        assert len(self.rule.check(ctx)) == 1

    def test_directive_inside_doc(self):
        ctx = func_context(plain("// F does things.\n//nolint: errcheck"))
        assert self.rule.check(ctx) == []

    def test_go_directive_without_space_after_colon(self):
        ctx = func_context(plain("// F does things.\n//go:noinline"))
        assert len(self.rule.check(ctx)) == 1


# =============================================================================
# ALL COMMENT RULES
# =============================================================================

class TestCheckComment:
    """Test running every comment rule on a function."""

    def test_all_rules(self):
        ctx = func_context(predicate("//IsFoo is foo", "IsFoo"))
        assert [f.rule_id for f in check_comment(ctx)] == ["D001", "D003", "D004"]

    def test_block_predicate(self):
        ctx = func_context(predicate("/*IsFoo*/", "IsFoo"))
        assert [f.rule_id for f in check_comment(ctx)] == ["D001", "D002"]

    def test_clean(self):
        ctx = func_context(predicate("// IsFoo reports whether foo.", "IsFoo"))
        assert check_comment(ctx) == []

    def test_custom_rules(self):
        ctx = func_context(predicate("//IsFoo is foo", "IsFoo"))
        assert [f.rule_id for f in check_comment(ctx, [LeadingSpaceRule()])] == ["D004"]

    def test_empty_rule_list(self):
        ctx = func_context(predicate("//IsFoo is foo", "IsFoo"))
        assert check_comment(ctx, []) == []


# =============================================================================
# PACKAGE RULE
# =============================================================================

def package_findings(files, config=None):
    ctx = PackageContext(path="pkg", package=make_package(files), config=config or LintConfig())
    return PackageDocRule().check(ctx)


class TestPackageDocRule:
    """Test the package doc-comment rule."""

    def test_missing(self):
        findings = package_findings({"pkg/a.go": "package foo\n"})
        assert len(findings) == 1
        assert findings[0].rule_id == "P001"
        assert str(findings[0]) == f"pkg: {MSG_NO_PACKAGE_DOC}"

    def test_detached_doc_is_missing(self):
        findings = package_findings({"pkg/a.go": "// Package foo.\n\npackage foo\n"})
        assert [f.rule_id for f in findings] == ["P001"]

    def test_many(self):
        findings = package_findings({
            "pkg/a.go": "// Package foo is a.\npackage foo\n",
            "pkg/b.go": "// Package foo is b.\npackage foo\n",
            "pkg/c.go": "package foo\n",
        })
        assert len(findings) == 1
        assert findings[0].rule_id == "P002"
        assert str(findings[0]) == "pkg: found 2 doc-comments, expected 1"

    def test_short_doc(self):
        assert package_findings({"pkg/a.go": "// Package foo does foo.\npackage foo\n"}) == []

    def test_long_doc_outside_doc_file(self):
        findings = package_findings({"pkg/foo.go": long_doc(101) + "package foo\n"})
        assert len(findings) == 1
        assert findings[0].rule_id == "P003"
        assert str(findings[0]) == f"pkg/foo.go: {MSG_LONG_PACKAGE_DOC}"

    def test_long_doc_in_doc_file(self):
        assert package_findings({"pkg/doc.go": long_doc(101) + "package foo\n"}) == []

    def test_limit_is_inclusive(self):
        assert package_findings({"pkg/foo.go": long_doc(100) + "package foo\n"}) == []

    def test_main_package_exempt(self):
        assert package_findings({"cmd/main.go": long_doc(150) + "package main\n"}) == []

    def test_block_doc_counts_physical_lines(self):
        doc = "/*\n" + "Package foo is long.\n" * 100 + "*/\n"
        findings = package_findings({"pkg/foo.go": doc + "package foo\n"})
        assert [f.rule_id for f in findings] == ["P003"]

    def test_custom_config(self):
        config = LintConfig(doc_file_name="README.go", max_package_doc_lines=3, entry_package="cli")
        files = {"pkg/doc.go": long_doc(4) + "package foo\n"}
        assert [f.rule_id for f in package_findings(files, config)] == ["P003"]
        files = {"pkg/README.go": long_doc(4) + "package foo\n"}
        assert package_findings(files, config) == []
        files = {"pkg/doc.go": long_doc(4) + "package cli\n"}
        assert package_findings(files, config) == []
