"""
godoclint - Go doc-comment style linter

Parses a Go package directory and checks the doc-comments of its package
clause and functions against a fixed house style.
"""

__version__ = "0.1.0"
__author__ = "godoclint contributors"

from godoclint.linter import DocLinter, lint_path
