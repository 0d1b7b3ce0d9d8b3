"""CLI entrypoint for Rkit."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rkit import __version__
from rkit.cache import CacheStore
from rkit.cli.handlers import handle_clone, handle_ls, handle_view
from rkit.config import load_or_create_config
from rkit.constants.branding import BRAND_NAME, CLI_DESCRIPTION
from rkit.exceptions import ConfigError, RkitError


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(prog=BRAND_NAME, description=CLI_DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase output verbosity")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Explicit config file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    clone = subparsers.add_parser("clone", help="Clone a repository into domain/org/repo under the workspace")
    clone.add_argument("url", help="Git repository URL to clone (HTTPS or SSH)")

    ls = subparsers.add_parser("ls", help="List git repositories in the workspace")
    ls.add_argument("-f", "--full", action="store_true", help="Show full paths instead of relative paths")
    ls.add_argument(
        "--max-depth",
        type=_non_negative_int,
        default=None,
        help="Maximum directory depth to search (default: 10)",
    )
    ls.add_argument("--follow-links", action="store_true", help="Follow symbolic links")
    ls.add_argument(
        "--same-file-system",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Stay on the workspace root's filesystem (default: on)",
    )
    ls.add_argument(
        "--threads",
        type=_positive_int,
        default=None,
        help="Number of walker threads (default: number of CPU cores)",
    )
    ls.add_argument(
        "--max-repos",
        type=_non_negative_int,
        default=None,
        help="Stop after this many repositories (default: no limit)",
    )
    ls.add_argument(
        "--descend-into-repos",
        action="store_true",
        help="Keep searching inside repositories for nested ones",
    )
    ls.add_argument(
        "--no-ignore",
        action="store_true",
        help="Do not honor .ignore and .gitignore files while walking",
    )
    ls.add_argument("-n", "--no-cache", action="store_true", help="Disable cache reads/writes")

    view = subparsers.add_parser("view", help="Show repository information")
    view.add_argument("path", type=Path, help="Repository path (relative paths resolve against the workspace)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )
    logging.getLogger(__name__).debug("Logger initialized at DEBUG level")

    try:
        config = load_or_create_config(args.config)
        if args.command == "view":
            return handle_view(args, config)

        cache = None if getattr(args, "no_cache", False) else CacheStore(config.cache)
        if args.command == "clone":
            return handle_clone(args, config, cache)
        if args.command == "ls":
            return handle_ls(args, config, cache)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except RkitError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    parser.error(f"Unsupported command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
