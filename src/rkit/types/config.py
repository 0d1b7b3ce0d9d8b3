"""Typed configuration structures for Rkit settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rkit.constants.cache import DEFAULT_CACHE_TTL_SECONDS, DEFAULT_LOCK_TIMEOUT_SECONDS


@dataclass(frozen=True)
class InspectCommand:
    """A labelled command template run by ``rkit view``."""

    label: str
    command: str


@dataclass(frozen=True)
class CacheSettings:
    """Tuning for the persistent repository cache."""

    ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    max_entries: int | None = None
    path: Path | None = None
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS
