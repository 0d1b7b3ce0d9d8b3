"""Persistent, validity-checked cache of discovered repositories.

One ``CacheStore`` is built per process and handed explicitly to whatever
needs it. Every mutating operation takes the write lock once, mutates the
in-memory entries and rewrites the whole cache file atomically. A failed
write leaves the in-memory mutation applied; the next successful save
brings the file back in line.

There is no inter-process locking on the cache file: two processes saving
concurrently race, and the last complete rename wins.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from pathlib import Path

from rkit.cache.document import load_cache_entries, save_cache_document
from rkit.cache.locking import ReadWriteLock
from rkit.config.paths import default_cache_path
from rkit.exceptions import CapacityExceeded, LockUnavailable, PersistenceFailure, RejectedEntry
from rkit.types import CacheEntry, CacheSettings
from rkit.utils import has_git_entry

logger = logging.getLogger(__name__)


def current_time() -> int:
    """Return the current time in whole epoch seconds."""
    return int(time.time())


def is_valid_entry(entry: CacheEntry, ttl_seconds: int, *, now: int | None = None) -> bool:
    """Return True when *entry* is fresh and still points at a git repository."""
    if now is None:
        now = current_time()

    if now - entry["last_checked"] > ttl_seconds:
        logger.debug("Cache entry expired for path: %s", entry["path"])
        return False

    path = Path(entry["path"])
    if not path.exists():
        logger.debug("Cache entry path does not exist: %s", path)
        return False
    if not has_git_entry(path):
        logger.debug("Cache entry is not a git repository: %s", path)
        return False
    return True


def update_entry(path: Path) -> CacheEntry:
    """Build a fresh entry for *path*, stamped as checked now."""
    now = current_time()
    try:
        last_modified = int(path.stat().st_mtime)
    except OSError:
        last_modified = now
    return {
        "path": str(path),
        "last_modified": last_modified,
        "last_checked": now,
    }


def cache_key(path: Path | str) -> str:
    """Return the mapping key used for *path*."""
    return str(Path(path))


class CacheStore:
    """Thread-safe repository cache backed by a JSON file."""

    def __init__(self, settings: CacheSettings | None = None) -> None:
        self.settings = settings or CacheSettings()
        self.cache_path = self.settings.path or default_cache_path()
        self._lock = ReadWriteLock()
        self._entries: dict[str, CacheEntry] = load_cache_entries(self.cache_path)
        self._dirty = False
        logger.debug("Loaded %d cache entries from %s", len(self._entries), self.cache_path)

    @property
    def ttl_seconds(self) -> int:
        return self.settings.ttl_seconds

    def __len__(self) -> int:
        with self._lock.read_locked(self.settings.lock_timeout):
            return len(self._entries)

    def get(self, path: Path | str) -> CacheEntry | None:
        """Look up the entry recorded for *path* without validating it.

        Makes a single non-blocking attempt at the read lock; contention is
        reported as a miss.
        """
        try:
            with self._lock.read_locked(timeout=0):
                entry = self._entries.get(cache_key(path))
        except LockUnavailable:
            logger.debug("Cache read lock busy; treating %s as a miss", path)
            return None
        return entry.copy() if entry is not None else None

    def is_valid(self, entry: CacheEntry) -> bool:
        """Apply the validity predicate with this store's TTL."""
        return is_valid_entry(entry, self.settings.ttl_seconds)

    def insert(self, path: Path | str, entry: CacheEntry) -> None:
        """Store *entry* under *path* and persist.

        Raises ``RejectedEntry`` for an entry failing the validity predicate
        and ``CapacityExceeded`` when a new key would grow the cache past
        ``max_entries``; neither mutates state. Replacing an existing key is
        always allowed.
        """
        key = cache_key(path)
        if not self.is_valid(entry):
            raise RejectedEntry(key)

        with self._lock.write_locked(self.settings.lock_timeout):
            max_entries = self.settings.max_entries
            if max_entries is not None and key not in self._entries and len(self._entries) >= max_entries:
                raise CapacityExceeded(max_entries)

            logger.debug("Inserting cache entry for path: %s", key)
            self._entries[key] = entry
            logger.debug("Current cache size: %d entries", len(self._entries))
            self._persist_locked()

    def validate_and_update(self) -> int:
        """Drop every entry failing the validity predicate and persist the rest.

        Returns the number of removed entries. The file is only rewritten when
        something changed or an earlier save failed, so a repeat call is a
        no-op.
        """
        with self._lock.write_locked(self.settings.lock_timeout):
            now = current_time()
            ttl_seconds = self.settings.ttl_seconds
            kept = {key: entry for key, entry in self._entries.items() if is_valid_entry(entry, ttl_seconds, now=now)}
            removed = len(self._entries) - len(kept)
            for key in self._entries.keys() - kept.keys():
                logger.debug("Removing invalid cache entry: %s", key)
            self._entries = kept
            if removed or self._dirty:
                self._persist_locked()
            return removed

    def validate_entries(self, paths: Iterable[Path | str]) -> list[Path]:
        """Return the subset of *paths* that currently have a valid entry."""
        try:
            with self._lock.read_locked(self.settings.lock_timeout):
                now = current_time()
                ttl_seconds = self.settings.ttl_seconds
                valid: list[Path] = []
                for path in paths:
                    entry = self._entries.get(cache_key(path))
                    if entry is not None and is_valid_entry(entry, ttl_seconds, now=now):
                        valid.append(Path(path))
                return valid
        except LockUnavailable:
            logger.debug("Cache read lock unavailable; reporting no valid entries")
            return []

    def update_and_save(self, path: Path) -> None:
        """Refresh the entry for *path* and persist it."""
        logger.debug("Updating and saving cache entry for path: %s", path)
        self.insert(path, update_entry(path))

    def update_and_save_many(self, paths: Iterable[Path]) -> int:
        """Refresh entries for all *paths* and persist them in a single write.

        Paths that no longer qualify as repositories are skipped. The batch
        is applied as a whole: when it would exceed ``max_entries`` nothing is
        changed. Returns the number of stored entries.
        """
        fresh: dict[str, CacheEntry] = {}
        for path in paths:
            entry = update_entry(path)
            if self.is_valid(entry):
                fresh[cache_key(path)] = entry
            else:
                logger.debug("Skipping cache update for non-repository path: %s", path)

        logger.debug("Updating and saving %d cache entries", len(fresh))
        with self._lock.write_locked(self.settings.lock_timeout):
            max_entries = self.settings.max_entries
            if max_entries is not None:
                added = len(fresh.keys() - self._entries.keys())
                if len(self._entries) + added > max_entries:
                    raise CapacityExceeded(max_entries)

            self._entries.update(fresh)
            self._persist_locked()
        return len(fresh)

    def save(self) -> None:
        """Persist the current in-memory snapshot unconditionally."""
        with self._lock.write_locked(self.settings.lock_timeout):
            self._persist_locked()

    def snapshot(self) -> dict[str, CacheEntry]:
        """Return a copy of all entries."""
        with self._lock.read_locked(self.settings.lock_timeout):
            return {key: entry.copy() for key, entry in self._entries.items()}

    def _persist_locked(self) -> None:
        """Write the full entry set; the caller must hold the write lock."""
        logger.debug("Saving %d cache entries to %s", len(self._entries), self.cache_path)
        try:
            save_cache_document(self.cache_path, dict(sorted(self._entries.items())))
        except (OSError, TypeError, ValueError) as exc:
            self._dirty = True
            raise PersistenceFailure(self.cache_path, exc) from exc
        self._dirty = False
