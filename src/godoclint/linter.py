"""
Doc-comment Linter

Runs the package rule and the comment rules over parsed Go packages and
feeds every finding to a Reporter.

Usage:
    linter = DocLinter()
    reporter = linter.lint_path("path/to/pkg")
    sys.exit(reporter.exit_status())
"""

import logging
from typing import Dict, List, Optional

from godoclint.config import LintConfig
from godoclint.parser import File, Package, parse_dir
from godoclint.reporting import Reporter
from godoclint.rules import (
    DEFAULT_COMMENT_RULES,
    CommentRule,
    FuncContext,
    PackageContext,
    PackageDocRule,
    check_comment,
)

logger = logging.getLogger(__name__)


class DocLinter:
    """
    Main linter class that runs rules against Go packages.

    Packages are visited in name order, files in name order, and functions
    in source order, so output is deterministic.
    """

    def __init__(
        self,
        config: Optional[LintConfig] = None,
        reporter: Optional[Reporter] = None,
        rules: Optional[List[CommentRule]] = None,
    ):
        self.config = config or LintConfig()
        self.reporter = reporter or Reporter()
        self.package_rule = PackageDocRule()
        self.rules = rules if rules is not None else [rule() for rule in DEFAULT_COMMENT_RULES]

    def lint_path(self, path: str) -> Reporter:
        """
        Parse a package directory and lint it.

        Raises:
            OSError, LexerError, ParseError: The directory could not be parsed.
                Nothing is reported in that case.
        """
        packages = parse_dir(path, include_tests=self.config.include_tests)
        if not packages:
            logger.warning(f"No Go files found in {path}")
        return self.lint_packages(packages, path)

    def lint_packages(self, packages: Dict[str, Package], path: str) -> Reporter:
        """Lint already-parsed packages; path anchors package-wide findings."""
        for name in sorted(packages):
            pkg = packages[name]
            logger.debug(f"Checking {pkg}")
            self.check_package(pkg, path)
            for filename in sorted(pkg.files):
                self.check_file(pkg.files[filename])
        logger.debug(f"{self.reporter.issues} issue(s) found in {path}")
        return self.reporter

    def check_package(self, pkg: Package, path: str) -> None:
        """Run the package doc-comment rule."""
        ctx = PackageContext(path=path, package=pkg, config=self.config)
        for finding in self.package_rule.check(ctx):
            self.reporter.report(finding)

    def check_file(self, f: File) -> None:
        """Run the comment rules on every documented function of a file."""
        for decl in f.funcs():
            if decl.doc is None:
                continue
            ctx = FuncContext(filename=f.filename, decl=decl)
            for finding in check_comment(ctx, self.rules):
                self.reporter.report(finding)


def lint_path(path: str, config: Optional[LintConfig] = None) -> Reporter:
    """Convenience function to lint a package directory."""
    linter = DocLinter(config=config)
    return linter.lint_path(path)
