"""Persistent repository cache."""

from __future__ import annotations

from .document import load_cache_entries, new_cache_document, read_cache_document, save_cache_document
from .locking import ReadWriteLock
from .store import CacheStore, cache_key, current_time, is_valid_entry, update_entry

__all__ = [
    "CacheStore",
    "ReadWriteLock",
    "cache_key",
    "current_time",
    "is_valid_entry",
    "load_cache_entries",
    "new_cache_document",
    "read_cache_document",
    "save_cache_document",
    "update_entry",
]
