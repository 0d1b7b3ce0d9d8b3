"""Readers-writer lock guarding the in-memory cache entries."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from rkit.exceptions import LockUnavailable


class ReadWriteLock:
    """Writer-preferring readers-writer lock.

    Any number of readers may hold the lock together; a writer holds it
    alone. Waiting writers block new readers so a steady stream of lookups
    cannot starve a mutation. ``timeout=None`` waits forever and
    ``timeout=0`` makes a single non-blocking attempt.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self, timeout: float | None = None) -> bool:
        with self._cond:
            acquired = self._cond.wait_for(
                lambda: not self._writer and self._writers_waiting == 0,
                timeout,
            )
            if acquired:
                self._readers += 1
            return acquired

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a matching acquire_read()")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self, timeout: float | None = None) -> bool:
        with self._cond:
            self._writers_waiting += 1
            try:
                acquired = self._cond.wait_for(
                    lambda: not self._writer and self._readers == 0,
                    timeout,
                )
            finally:
                self._writers_waiting -= 1
            if acquired:
                self._writer = True
            else:
                # Readers blocked behind this writer may proceed now.
                self._cond.notify_all()
            return acquired

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without a matching acquire_write()")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self, timeout: float | None = None) -> Iterator[None]:
        """Hold the lock shared for the block, raising ``LockUnavailable`` on timeout."""
        if not self.acquire_read(timeout):
            raise LockUnavailable("read")
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self, timeout: float | None = None) -> Iterator[None]:
        """Hold the lock exclusively for the block, raising ``LockUnavailable`` on timeout."""
        if not self.acquire_write(timeout):
            raise LockUnavailable("write")
        try:
            yield
        finally:
            self.release_write()
