"""Constants used by the repository cache."""

from __future__ import annotations

CACHE_VERSION: int = 1
CACHE_FILENAME: str = "cache.json"
CACHE_TEMP_SUFFIX: str = ".tmp"
DEFAULT_CACHE_TTL_SECONDS: int = 24 * 60 * 60

# Seconds a mutating cache operation waits for the write lock before giving up.
DEFAULT_LOCK_TIMEOUT_SECONDS: float = 5.0
