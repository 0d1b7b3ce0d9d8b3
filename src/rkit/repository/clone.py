"""Clone a repository into the canonical workspace layout."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rkit.cache import CacheStore
from rkit.constants.repository import GIT_EXECUTABLE
from rkit.exceptions import CacheError, GitCommandError, RepoPermissionError
from rkit.repository.process import CommandRunner, run_command
from rkit.repository.url import parse_repo_url

logger = logging.getLogger(__name__)


def clone_repository(
    url: str,
    workspace_root: Path,
    *,
    cache: CacheStore | None = None,
    runner: CommandRunner = run_command,
) -> Path:
    """Clone *url* to ``workspace_root/domain/org/repo`` and return the target."""
    logger.info("Cloning repository: %s", url)
    target_dir = parse_repo_url(url).target_dir(workspace_root)
    _prepare_parent(target_dir.parent)

    logger.info("Running: git clone %s %s", url, target_dir)
    result = runner([GIT_EXECUTABLE, "clone", url, str(target_dir)])
    if not result.ok:
        logger.error("git clone failed with status: %s", result.exit_status)
        detail = result.stderr.strip()
        message = f"git clone failed with status: {result.exit_status}"
        raise GitCommandError(f"{message}: {detail}" if detail else message)

    if cache is not None:
        try:
            cache.update_and_save(target_dir)
        except CacheError as exc:
            logger.warning("Failed to cache cloned repository: %s", exc)

    logger.info("Successfully cloned %s to %s", url, target_dir)
    return target_dir


def _prepare_parent(parent: Path) -> None:
    if not parent.exists():
        logger.debug("Creating parent directories: %s", parent)
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except PermissionError as exc:
            raise RepoPermissionError(f"No permission to write to directory: {parent}") from exc
        except OSError as exc:
            raise RepoPermissionError(f"Failed to create directory: {parent} ({exc})") from exc
        return

    if not os.access(parent, os.W_OK | os.X_OK):
        logger.error("No permission to write to directory: %s", parent)
        raise RepoPermissionError(f"No permission to write to directory: {parent}")
