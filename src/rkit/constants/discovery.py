"""Constants for repository discovery."""

from __future__ import annotations

GIT_DIR_NAME: str = ".git"

# Directories deeper than this below the walk root are not examined.
DEFAULT_MAX_DEPTH: int = 10

WALKER_THREAD_NAME_PREFIX: str = "rkit-walk"
ROOT_DISPLAY_NAME: str = "."

# Ignore files honored while walking. ``.gitignore`` only applies inside a repository.
IGNORE_FILENAME: str = ".ignore"
GITIGNORE_FILENAME: str = ".gitignore"
