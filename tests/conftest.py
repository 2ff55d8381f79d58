"""
Pytest configuration and shared fixtures.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from godoclint.parser import FuncDecl, Package, parse_source
from godoclint.rules import FuncContext


# =============================================================================
# ENVIRONMENT
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep a real ~/.godoclint.yaml or GODOCLINT_* variables out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("GODOCLINT_DOC_FILE", "GODOCLINT_MAX_DOC_LINES", "GODOCLINT_ENTRY_PACKAGE"):
        monkeypatch.delenv(var, raising=False)
    yield home
    # main() binds a handler to the captured stderr of the test that ran it
    logger = logging.getLogger("godoclint")
    logger.handlers[:] = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# =============================================================================
# PACKAGE FIXTURES
# =============================================================================

@pytest.fixture
def go_package(tmp_path):
    """Factory: write {filename: source} into a fresh directory and return its path."""
    def make(files, name="pkg"):
        pkg_dir = tmp_path / name
        pkg_dir.mkdir()
        for filename, source in files.items():
            (pkg_dir / filename).write_text(source, encoding="utf-8")
        return pkg_dir
    return make


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def parse_funcs(source: str, package: str = "p") -> list:
    """Parse declarations that follow a package clause; return the functions."""
    f = parse_source(f"package {package}\n\n{source}", "p.go")
    return f.funcs()


def first_func(source: str) -> FuncDecl:
    """Parse declarations and return the first function."""
    return parse_funcs(source)[0]


def func_context(source: str, filename: str = "p.go") -> FuncContext:
    """FuncContext for the first function in source."""
    return FuncContext(filename=filename, decl=first_func(source))


def make_package(files: dict, name: str = None) -> Package:
    """Build a Package from {filename: source}, like parse_dir does."""
    parsed = {filename: parse_source(source, filename) for filename, source in files.items()}
    if name is None:
        name = next(iter(parsed.values())).package_name.name
    return Package(name=name, files=parsed)


def long_doc(lines: int) -> str:
    """A // package doc-comment spanning the given number of lines."""
    return "".join(f"// Line {i} of the package doc.\n" for i in range(lines))
