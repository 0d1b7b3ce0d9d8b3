"""Repository discovery combining the cache fast path with a tree walk."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from rkit.cache import CacheStore
from rkit.discovery.policy import WalkerConfig
from rkit.discovery.walker import Walker
from rkit.exceptions import CacheError, ConfigError
from rkit.utils import display_path

logger = logging.getLogger(__name__)

type WalkerFactory = Callable[[WalkerConfig], Walker]
type PathSink = Callable[[str], object]


class DiscoveryCoordinator:
    """Lists repositories under a root, consulting and refreshing the cache.

    Cache problems never change the answer, only how it is obtained: any
    ``CacheError`` is logged and discovery falls back to walking the tree.
    Passing ``cache=None`` disables both the lookup and the write-back.
    """

    def __init__(self, cache: CacheStore | None, *, walker_factory: WalkerFactory = Walker) -> None:
        self.cache = cache
        self.walker_factory = walker_factory
        self.last_walker: Walker | None = None

    def discover(
        self,
        root: Path,
        *,
        full: bool = False,
        config: WalkerConfig | None = None,
        emit: PathSink | None = None,
    ) -> list[str]:
        """Return repository paths under *root*, streaming each to *emit* as found.

        Paths are relative to *root* unless *full* is set.
        """
        root = root.resolve()
        if not root.is_dir():
            raise ConfigError(f"Workspace root does not exist or is not a directory: {root}")

        config = config or WalkerConfig()
        self._maintain_cache()

        cached = self._cached_root(root) if _single_answer(config) else None
        if cached is not None:
            logger.debug("Cache hit for %s", root)
            rendered = display_path(cached, root, full=full)
            if emit is not None:
                emit(rendered)
            return [rendered]

        logger.debug("Listing repositories in workspace: %s", root)
        walker = self.walker_factory(config)
        self.last_walker = walker

        found: list[Path] = []
        rendered_paths: list[str] = []
        for path in walker.walk(root):
            found.append(path)
            rendered = display_path(path, root, full=full)
            rendered_paths.append(rendered)
            if emit is not None:
                emit(rendered)

        self._remember(found)
        return rendered_paths

    def _maintain_cache(self) -> None:
        if self.cache is None:
            return
        try:
            removed = self.cache.validate_and_update()
        except CacheError as exc:
            logger.warning("Cache maintenance failed: %s", exc)
            return
        if removed:
            logger.debug("Pruned %d stale cache entries", removed)

    def _cached_root(self, root: Path) -> Path | None:
        if self.cache is None:
            return None
        entry = self.cache.get(root)
        if entry is None or not self.cache.is_valid(entry):
            return None
        return Path(entry["path"])

    def _remember(self, found: list[Path]) -> None:
        if self.cache is None or not found:
            return
        try:
            self.cache.update_and_save_many(found)
        except CacheError as exc:
            logger.warning("Failed to cache discovered repositories: %s", exc)


def _single_answer(config: WalkerConfig) -> bool:
    """Whether a repository root is the whole result of walking it under *config*."""
    if not config.stop_descending_into_repos:
        return False
    return config.max_repos is None or config.max_repos >= 1
