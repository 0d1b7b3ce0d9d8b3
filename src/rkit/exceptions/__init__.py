"""Shared exception hierarchy for Rkit."""

from __future__ import annotations

from .base import RkitError
from .cache import (
    CacheError,
    CapacityExceeded,
    CorruptCache,
    LockUnavailable,
    PersistenceFailure,
    RejectedEntry,
    SchemaMismatch,
)
from .config import ConfigError
from .repository import (
    GitCommandError,
    InvalidRepoUrl,
    NotARepository,
    RepoNotFound,
    RepoPermissionError,
    RepositoryError,
    ShellCommandError,
)

__all__ = [
    "CacheError",
    "CapacityExceeded",
    "ConfigError",
    "CorruptCache",
    "GitCommandError",
    "InvalidRepoUrl",
    "LockUnavailable",
    "NotARepository",
    "PersistenceFailure",
    "RejectedEntry",
    "RepoNotFound",
    "RepoPermissionError",
    "RepositoryError",
    "RkitError",
    "SchemaMismatch",
    "ShellCommandError",
]
