"""Command-line interface for git-springclean.

Usage:
    git-springclean [options] [path]
    python -m springclean [options] [path]

Each reported repository is printed as ``<codes> <path>`` where the codes
are U (untracked files), M (modified files), P (unpushed branches) and
E (a check failed). The exit status is the number of repositories that
need attention.
"""

import argparse
import logging
import os
import sys

from pydantic import ValidationError

from . import __version__
from .core.config import CheckOptions
from .core.git_utils import GitUnavailableError
from .core.report import scan

logger = logging.getLogger(__name__)

EXIT_FAILURE = 255
MAX_EXIT_CODE = 255


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-springclean",
        description="Find git repositories with untracked files, local changes or unpushed branches",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Codes:
  U  untracked files
  M  modified or staged files
  P  branches not merged into any remote branch
  E  a check could not run (details on stderr)

Examples:
  # Scan everything below the current directory
  git-springclean

  # Only care about unpushed work, show clean repositories too
  git-springclean ~/src --no-untracked --no-modified --all

  # List the offending branches
  git-springclean ~/src -v
        """,
    )

    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory to scan (default: current directory)",
    )

    parser.add_argument(
        "-A",
        "--all",
        action="store_true",
        help="List all repos, even if they look ok",
    )

    parser.add_argument(
        "-U",
        "--no-untracked",
        action="store_true",
        help="Don't report untracked files",
    )

    parser.add_argument(
        "-M",
        "--no-modified",
        action="store_true",
        help="Don't report modified files",
    )

    parser.add_argument(
        "-P",
        "--no-unpushed",
        action="store_true",
        help="Don't report unpushed branches",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Be more verbose",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Display version and exit",
    )

    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=1,
        help="Check this many repositories in parallel (default: 1)",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Give up on a single git call after this many seconds",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON object per reported repository",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every git invocation to stderr",
    )

    return parser


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"git-springclean {__version__}")
        return 0

    configure_logging(args.debug)

    try:
        options = CheckOptions.from_args(args)
    except ValidationError as exc:
        parser.error(str(exc))

    # Exit early when the starting point itself is unreadable.
    try:
        os.stat(options.path)
    except OSError as exc:
        print(f"Unable to read {options.path}: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        failing = scan(options)
    except GitUnavailableError as exc:
        logger.critical("%s", exc)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nScan interrupted by user", file=sys.stderr)
        return 130

    return min(failing, MAX_EXIT_CODE)


if __name__ == "__main__":
    sys.exit(main())
