"""
CLI entry point for godoclint.

Usage:
    godoclint --path <dir>                 Lint the Go package in <dir>
    godoclint --path <dir> --json          Also print findings as JSON
    godoclint --path <dir> --config FILE   Use settings from a YAML file

Exit status:
    0   no findings
    1   findings were reported
    2   fatal error (bad arguments, unreadable or unparsable package)
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from godoclint import __version__
from godoclint.config import ConfigError, load_config
from godoclint.linter import DocLinter
from godoclint.parser import LexerError, ParseError
from godoclint.reporting import Reporter

logger = logging.getLogger("godoclint")

EXIT_FATAL = 2


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr; debug level with --verbose."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="godoclint",
        description="Check Go doc-comments against house style",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    godoclint --path ./pkg/cache
    godoclint --path ./cmd/server --json
"""
    )
    parser.add_argument('--version', action='version', version=f'godoclint {__version__}')
    parser.add_argument('-p', '--path', default="", help='Path to the package to be checked')
    parser.add_argument('-c', '--config', help='YAML config file')
    parser.add_argument('--json', action='store_true', help='Print findings as JSON on stdout')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if not args.path:
        logger.error("path can't be empty")
        return EXIT_FATAL

    try:
        config_path = Path(args.config) if args.config else None
        config = load_config(config_path, package_path=args.path)
    except ConfigError as e:
        logger.error(str(e))
        return EXIT_FATAL

    linter = DocLinter(config=config, reporter=Reporter())
    try:
        reporter = linter.lint_path(args.path)
    except (LexerError, ParseError, OSError) as e:
        logger.error(f"parse path: {e}")
        return EXIT_FATAL

    if args.json:
        print(reporter.render_json())

    return reporter.exit_status()


if __name__ == "__main__":
    sys.exit(main())
