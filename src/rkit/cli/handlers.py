"""CLI subcommand handlers."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from rkit.cache import CacheStore
from rkit.config import RkitConfig
from rkit.discovery import DiscoveryCoordinator, WalkerConfig, default_worker_count
from rkit.repository import clone_repository, inspect_repository, render_sections

logger = logging.getLogger(__name__)


def build_walker_config(args: argparse.Namespace) -> WalkerConfig:
    """Translate ``ls`` flags into a walker configuration."""
    defaults = WalkerConfig()
    return WalkerConfig(
        max_depth=args.max_depth if args.max_depth is not None else defaults.max_depth,
        follow_symlinks=args.follow_links,
        stay_on_filesystem=args.same_file_system,
        worker_count=args.threads if args.threads is not None else default_worker_count(),
        max_repos=args.max_repos,
        stop_descending_into_repos=not args.descend_into_repos,
        respect_ignore_files=not args.no_ignore,
    )


def handle_ls(args: argparse.Namespace, config: RkitConfig, cache: CacheStore | None) -> int:
    """List repositories under the workspace root, one per line."""
    coordinator = DiscoveryCoordinator(cache)
    try:
        coordinator.discover(
            config.expanded_workspace_root(),
            full=args.full,
            config=build_walker_config(args),
            emit=_print_line,
        )
    except BrokenPipeError:
        # Reader closed the pipe, e.g. ``rkit ls | head``.
        _silence_stdout()
    return 0


def handle_clone(args: argparse.Namespace, config: RkitConfig, cache: CacheStore | None) -> int:
    """Clone a repository into ``workspace_root/domain/org/repo``."""
    target = clone_repository(args.url, config.expanded_workspace_root(), cache=cache)
    print(target)
    return 0


def handle_view(args: argparse.Namespace, config: RkitConfig) -> int:
    """Print inspection output for one repository."""
    repo_path = args.path if args.path.is_absolute() else config.expanded_workspace_root() / args.path
    sections = inspect_repository(repo_path, config.inspect_commands)
    print(render_sections(sections), end="")
    return 0


def _print_line(line: str) -> None:
    print(line, flush=True)


def _silence_stdout() -> None:
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError) as exc:
        logger.debug("Could not redirect stdout after broken pipe: %s", exc)
