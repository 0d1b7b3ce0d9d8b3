"""Repository, clone, and subprocess exceptions."""

from __future__ import annotations

from pathlib import Path

from rkit.exceptions.base import RkitError


class RepositoryError(RkitError):
    """Base class for repository operation failures."""


class InvalidRepoUrl(RepositoryError, ValueError):
    """Raised when a clone URL is neither a usable HTTPS nor SSH URL."""


class RepoNotFound(RepositoryError):
    """Raised when a repository path does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Repository not found: {path}")
        self.path = path


class NotARepository(RepositoryError):
    """Raised when a directory has no ``.git`` entry."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"{path} is not a git repository")
        self.path = path


class RepoPermissionError(RepositoryError):
    """Raised when a directory cannot be read or written."""


class ShellCommandError(RepositoryError):
    """Raised when a subprocess cannot be started."""

    def __init__(self, command: str, reason: object) -> None:
        super().__init__(f"Shell command execution failed: {command} ({reason})")
        self.command = command


class GitCommandError(RepositoryError):
    """Raised when ``git`` exits with a non-zero status."""
