"""Shared, lock-protected sink for matches emitted by walker threads."""

from __future__ import annotations

import threading
from pathlib import Path


class MatchCollector:
    """Collects repository roots found by concurrent workers.

    The count check and the append happen under one lock, so ``limit`` is an
    exact cap: once reached, further matches are refused.
    """

    def __init__(self, limit: int | None = None) -> None:
        self._lock = threading.Lock()
        self._matches: list[Path] = []
        self._limit = limit

    def add(self, path: Path) -> bool:
        """Record *path*; returns False when the cap was already reached."""
        with self._lock:
            if self._limit is not None and len(self._matches) >= self._limit:
                return False
            self._matches.append(path)
            return True

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._matches)

    @property
    def full(self) -> bool:
        with self._lock:
            return self._limit is not None and len(self._matches) >= self._limit

    def matches(self) -> list[Path]:
        """Return a copy of everything collected so far, in emission order."""
        with self._lock:
            return list(self._matches)
