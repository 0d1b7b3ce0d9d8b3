"""Tests for the shared match collector."""

from __future__ import annotations

import threading
from pathlib import Path

from rkit.discovery import MatchCollector


def test_collects_without_limit() -> None:
    collector = MatchCollector()

    assert collector.add(Path("a"))
    assert collector.add(Path("b"))

    assert collector.matches() == [Path("a"), Path("b")]
    assert not collector.full


def test_limit_is_exact_under_contention() -> None:
    collector = MatchCollector(limit=3)
    barrier = threading.Barrier(8)

    def add_many(worker: int) -> None:
        barrier.wait()
        for index in range(50):
            collector.add(Path(f"w{worker}/{index}"))

    threads = [threading.Thread(target=add_many, args=(worker,)) for worker in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert collector.count == 3
    assert collector.full
    assert not collector.add(Path("late"))


def test_zero_limit_refuses_everything() -> None:
    collector = MatchCollector(limit=0)

    assert collector.full
    assert not collector.add(Path("a"))
    assert collector.matches() == []
