"""Concurrent directory walker that finds repository roots.

A fixed pool of worker threads pulls directory listings off a shared work
queue. For each entry a worker asks ``decide_entry`` what to do, pushes
subdirectories back onto the queue, and hands matches to a shared
``MatchCollector``. Stopping is cooperative: once the walk is told to stop,
workers finish the directory they are listing and then only drain the
queue without scanning.

``.ignore`` files are honored everywhere and ``.gitignore`` files inside
repositories, unless ``WalkerConfig.respect_ignore_files`` is off.
"""

from __future__ import annotations

import logging
import os
import queue
import stat
import threading
import time
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from rkit.constants.discovery import GIT_DIR_NAME, GITIGNORE_FILENAME, IGNORE_FILENAME, WALKER_THREAD_NAME_PREFIX
from rkit.discovery.collector import MatchCollector
from rkit.discovery.ignore import IgnoreStack, read_ignore_file
from rkit.discovery.policy import EntryFacts, Verdict, WalkDecision, WalkerConfig, decide_entry
from rkit.utils import has_git_entry

logger = logging.getLogger(__name__)

_DONE = object()


@dataclass
class WalkStats:
    """Counters for the most recent walk."""

    scanned_dirs: int = 0
    skipped_errors: int = 0
    matches: int = 0
    duration: float = 0.0


@dataclass(frozen=True)
class _WorkItem:
    path: Path
    depth: int
    ignores: IgnoreStack = IgnoreStack()
    # Whether this directory is a repository or lies inside one.
    in_repo: bool = False


class Walker:
    """Finds directories containing a ``.git`` entry under a root."""

    def __init__(self, config: WalkerConfig | None = None) -> None:
        self.config = config or WalkerConfig()
        self.stats = WalkStats()
        self.collector = MatchCollector(self.config.max_repos)

    def walk(self, root: Path) -> Iterator[Path]:
        """Yield repository roots under *root* as workers find them.

        Order follows thread scheduling and differs between runs. Closing the
        iterator early stops the walk.
        """
        self.collector = MatchCollector(self.config.max_repos)
        self.stats = WalkStats()
        run = _WalkRun(Path(root), self.config, self.collector, self.stats)

        started_at = time.perf_counter()
        run.start()
        try:
            while True:
                item = run.results.get()
                if item is _DONE:
                    break
                yield item  # type: ignore[misc]
            if run.error is not None:
                raise run.error
        finally:
            run.shutdown()
            self.stats.matches = self.collector.count
            self.stats.duration = time.perf_counter() - started_at
            logger.debug(
                "Walked %s: %d repositories, %d directories scanned, %d entries skipped on error, %.3fs",
                root,
                self.stats.matches,
                self.stats.scanned_dirs,
                self.stats.skipped_errors,
                self.stats.duration,
            )

    def collect(self, root: Path) -> list[Path]:
        """Run a full walk and return every match."""
        return list(self.walk(root))


class _WalkRun:
    """State shared by the workers of a single walk."""

    def __init__(self, root: Path, config: WalkerConfig, collector: MatchCollector, stats: WalkStats) -> None:
        self.root = root
        self.config = config
        self.collector = collector
        self.stats = stats
        self.results: queue.SimpleQueue[object] = queue.SimpleQueue()
        self.stop = threading.Event()
        self.error: BaseException | None = None

        self._work: queue.SimpleQueue[_WorkItem | None] = queue.SimpleQueue()
        self._lock = threading.Lock()
        # Starts at one for the seeding step so an empty walk still finishes.
        self._pending = 1
        self._visited: set[tuple[int, int]] = set()
        self._root_device: int | None = None
        self._threads: list[threading.Thread] = []

    def start(self) -> None:
        for index in range(self.config.worker_count):
            thread = threading.Thread(
                target=self._worker,
                name=f"{WALKER_THREAD_NAME_PREFIX}-{index}",
                daemon=True,
            )
            thread.start()
            self._threads.append(thread)

        try:
            self._seed()
        finally:
            self._task_done()

    def shutdown(self) -> None:
        self.stop.set()
        for thread in self._threads:
            thread.join()

    def _seed(self) -> None:
        try:
            root_stat = os.stat(self.root)
        except OSError as exc:
            logger.debug("Cannot stat walk root %s: %s", self.root, exc)
            self._count_error()
            return

        self._root_device = root_stat.st_dev
        facts = EntryFacts(
            name=self.root.name,
            depth=0,
            is_dir=stat.S_ISDIR(root_stat.st_mode),
            is_repo=has_git_entry(self.root),
            device=root_stat.st_dev,
            root_device=root_stat.st_dev,
        )
        verdict = decide_entry(facts, self.config, self.collector.count)
        self._apply(_WorkItem(self.root, 0, in_repo=facts.is_repo), verdict)

    def _worker(self) -> None:
        while True:
            item = self._work.get()
            if item is None:
                return
            try:
                if not self.stop.is_set():
                    self._scan(item)
            except BaseException as exc:
                with self._lock:
                    if self.error is None:
                        self.error = exc
                self.stop.set()
            finally:
                self._task_done()

    def _scan(self, item: _WorkItem) -> None:
        with self._lock:
            self.stats.scanned_dirs += 1
        try:
            with os.scandir(item.path) as iterator:
                entries = list(iterator)
        except OSError as exc:
            logger.debug("Skipping unreadable directory %s: %s", item.path, exc)
            self._count_error()
            return

        ignores = self._ignores_for(item, entries)
        child_depth = item.depth + 1
        for entry in entries:
            try:
                facts = self._entry_facts(entry, child_depth, ignores)
            except OSError as exc:
                logger.debug("Skipping entry %s: %s", entry.path, exc)
                self._count_error()
                continue
            verdict = decide_entry(facts, self.config, self.collector.count)
            child = _WorkItem(Path(entry.path), child_depth, ignores, item.in_repo or facts.is_repo)
            if not self._apply(child, verdict):
                return

    def _ignores_for(self, item: _WorkItem, entries: list[os.DirEntry[str]]) -> IgnoreStack:
        """Extend the inherited rules with the ignore files found in *item*."""
        if not self.config.respect_ignore_files:
            return item.ignores

        present = {entry.name for entry in entries if entry.name in (GITIGNORE_FILENAME, IGNORE_FILENAME)}
        # .ignore is appended last so it overrides .gitignore in the same directory.
        filenames = [IGNORE_FILENAME]
        if item.in_repo:
            filenames.insert(0, GITIGNORE_FILENAME)

        ignores = item.ignores
        for filename in filenames:
            if filename not in present:
                continue
            try:
                ignores = ignores.extended(read_ignore_file(item.path / filename))
            except OSError as exc:
                logger.debug("Skipping unreadable ignore file %s: %s", item.path / filename, exc)
                self._count_error()
        return ignores

    def _entry_facts(self, entry: os.DirEntry[str], depth: int, ignores: IgnoreStack) -> EntryFacts:
        is_symlink = entry.is_symlink()
        is_dir = entry.is_dir(follow_symlinks=self.config.follow_symlinks)
        if not is_dir or entry.name == GIT_DIR_NAME:
            return EntryFacts(name=entry.name, depth=depth, is_dir=is_dir, is_symlink=is_symlink)

        path = Path(entry.path)
        if self.config.respect_ignore_files and ignores.is_ignored(path, is_dir=True):
            return EntryFacts(name=entry.name, depth=depth, is_dir=True, is_symlink=is_symlink, is_ignored=True)

        device: int | None = None
        if self.config.stay_on_filesystem:
            device = entry.stat(follow_symlinks=self.config.follow_symlinks).st_dev

        return EntryFacts(
            name=entry.name,
            depth=depth,
            is_dir=True,
            is_symlink=is_symlink,
            is_repo=has_git_entry(entry.path),
            device=device,
            root_device=self._root_device,
        )

    def _apply(self, item: _WorkItem, verdict: Verdict) -> bool:
        """Act on a verdict for *item*; returns False once the walk should stop."""
        if verdict.decision is WalkDecision.QUIT:
            self.stop.set()
            return False

        if verdict.emit:
            if self.collector.add(item.path):
                self.results.put(item.path)
            if self.collector.full:
                self.stop.set()
                return False

        if verdict.decision is WalkDecision.CONTINUE and self._should_list(item.path, item.depth):
            self._submit(item)
        return True

    def _should_list(self, path: Path, depth: int) -> bool:
        # Children of a directory at max_depth would all be skipped.
        if self.config.max_depth is not None and depth >= self.config.max_depth:
            return False
        if not self.config.follow_symlinks:
            return True

        try:
            target = os.stat(path)
        except OSError as exc:
            logger.debug("Skipping unreachable directory %s: %s", path, exc)
            self._count_error()
            return False
        identity = (target.st_dev, target.st_ino)
        with self._lock:
            if identity in self._visited:
                logger.debug("Skipping already visited directory %s", path)
                return False
            self._visited.add(identity)
        return True

    def _submit(self, item: _WorkItem) -> None:
        with self._lock:
            self._pending += 1
        self._work.put(item)

    def _task_done(self) -> None:
        with self._lock:
            self._pending -= 1
            finished = self._pending == 0
        if finished:
            for _ in self._threads:
                self._work.put(None)
            self.results.put(_DONE)

    def _count_error(self) -> None:
        with self._lock:
            self.stats.skipped_errors += 1
