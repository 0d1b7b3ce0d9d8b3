"""Per-entry walk policy.

``decide_entry`` is a pure function of what the walker observed about one
directory entry, the walk settings and the number of matches so far. It is
kept free of I/O so the policy can be exercised without threads or a real
filesystem.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from rkit.constants.discovery import DEFAULT_MAX_DEPTH, GIT_DIR_NAME


def default_worker_count() -> int:
    """Host parallelism, never less than one."""
    return os.cpu_count() or 1


@dataclass(frozen=True)
class WalkerConfig:
    """Settings for one discovery walk."""

    max_depth: int | None = DEFAULT_MAX_DEPTH
    follow_symlinks: bool = False
    stay_on_filesystem: bool = True
    worker_count: int = field(default_factory=default_worker_count)
    max_repos: int | None = None
    stop_descending_into_repos: bool = True
    respect_ignore_files: bool = True

    def __post_init__(self) -> None:
        if self.worker_count < 1:
            raise ValueError("worker_count must be at least 1")
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError("max_depth must not be negative")
        if self.max_repos is not None and self.max_repos < 0:
            raise ValueError("max_repos must not be negative")


class WalkDecision(Enum):
    """What the walker does after visiting an entry."""

    CONTINUE = "continue"
    SKIP_SUBTREE = "skip_subtree"
    QUIT = "quit"


class Verdict(NamedTuple):
    """Decision for one entry plus whether it is reported as a match."""

    decision: WalkDecision
    emit: bool = False


@dataclass(frozen=True)
class EntryFacts:
    """Observations about one directory entry.

    ``device`` is ``None`` when it was not looked up because the walk does
    not need to stay on one filesystem.
    """

    name: str
    depth: int
    is_dir: bool
    is_symlink: bool = False
    is_repo: bool = False
    is_ignored: bool = False
    device: int | None = None
    root_device: int | None = None


QUIT = Verdict(WalkDecision.QUIT)
SKIP = Verdict(WalkDecision.SKIP_SUBTREE)
DESCEND = Verdict(WalkDecision.CONTINUE)


def decide_entry(facts: EntryFacts, config: WalkerConfig, matches_so_far: int) -> Verdict:
    """Return the verdict for one visited entry."""
    if config.max_repos is not None and matches_so_far >= config.max_repos:
        return QUIT
    if not facts.is_dir or facts.name == GIT_DIR_NAME:
        return SKIP
    if facts.is_ignored and config.respect_ignore_files:
        return SKIP
    if facts.is_symlink and not config.follow_symlinks:
        return SKIP
    if (
        config.stay_on_filesystem
        and facts.device is not None
        and facts.root_device is not None
        and facts.device != facts.root_device
    ):
        return SKIP
    if config.max_depth is not None and facts.depth > config.max_depth:
        return SKIP
    if facts.is_repo:
        if config.stop_descending_into_repos:
            return Verdict(WalkDecision.SKIP_SUBTREE, emit=True)
        return Verdict(WalkDecision.CONTINUE, emit=True)
    return DESCEND
