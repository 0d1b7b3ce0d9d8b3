"""Concurrent repository discovery backed by the persistent cache."""

from __future__ import annotations

from .collector import MatchCollector
from .coordinator import DiscoveryCoordinator
from .policy import EntryFacts, Verdict, WalkDecision, WalkerConfig, decide_entry, default_worker_count
from .walker import Walker, WalkStats

__all__ = [
    "DiscoveryCoordinator",
    "EntryFacts",
    "MatchCollector",
    "Verdict",
    "WalkDecision",
    "WalkStats",
    "Walker",
    "WalkerConfig",
    "decide_entry",
    "default_worker_count",
]
