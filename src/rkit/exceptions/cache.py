"""Cache-layer exceptions.

Every cache failure is recoverable: callers degrade to a full tree walk.
Only ``PersistenceFailure``, ``CapacityExceeded`` and ``RejectedEntry`` are
surfaced by mutating operations; ``SchemaMismatch`` and ``CorruptCache`` are
raised by the low-level document reader and absorbed at load time.
"""

from __future__ import annotations

from pathlib import Path

from rkit.exceptions.base import RkitError


class CacheError(RkitError):
    """Base class for cache failures."""


class LockUnavailable(CacheError):
    """Raised when the cache lock cannot be acquired in time."""

    def __init__(self, mode: str) -> None:
        super().__init__(f"Failed to acquire cache {mode} lock")
        self.mode = mode


class SchemaMismatch(CacheError):
    """Raised when the on-disk cache document has an unsupported version."""

    def __init__(self, found: object, expected: int) -> None:
        super().__init__(f"Invalid cache version: {found!r} (expected {expected})")
        self.found = found
        self.expected = expected


class CorruptCache(CacheError):
    """Raised when the on-disk cache document cannot be parsed."""


class PersistenceFailure(CacheError):
    """Raised when writing or renaming the cache file fails."""

    def __init__(self, path: Path, reason: object) -> None:
        super().__init__(f"Failed to write cache file {path}: {reason}")
        self.path = path


class CapacityExceeded(CacheError):
    """Raised when an insert would grow the cache past its configured maximum."""

    def __init__(self, max_entries: int) -> None:
        super().__init__(f"Cache is full: {max_entries} entries")
        self.max_entries = max_entries


class RejectedEntry(CacheError):
    """Raised when an entry fails the validity predicate at insertion time."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Invalid cache entry for path: {path}")
        self.path = path
