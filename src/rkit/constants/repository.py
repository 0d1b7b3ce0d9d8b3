"""Constants for repository URLs, cloning, and inspection."""

from __future__ import annotations

HTTP_URL_PREFIXES: tuple[str, ...] = ("http://", "https://")
GIT_URL_SUFFIX: str = ".git"
GIT_EXECUTABLE: str = "git"
REPO_PLACEHOLDER: str = "{REPO}"
README_FILENAME: str = "README.md"
