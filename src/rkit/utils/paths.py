"""Path rendering and expansion helpers."""

from __future__ import annotations

import os
from pathlib import Path

from rkit.constants.discovery import GIT_DIR_NAME, ROOT_DISPLAY_NAME


def display_path(path: Path, root: Path, *, full: bool) -> str:
    """Render *path* for output, relative to *root* unless *full* is set."""
    if full:
        return str(path)
    try:
        relative = path.relative_to(root)
    except ValueError:
        return str(path)
    return str(relative) if relative.parts else ROOT_DISPLAY_NAME


def expand_user_path(raw: str) -> Path:
    """Expand ``~`` and environment variables in a configured path."""
    return Path(os.path.expandvars(os.path.expanduser(raw)))


def has_git_entry(path: Path | str) -> bool:
    """Return True when *path* holds a ``.git`` directory or file.

    A dangling ``.git`` symlink does not count.
    """
    return os.path.exists(os.path.join(path, GIT_DIR_NAME))
