"""Shared pytest fixtures for workspace trees and cache stores."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from rkit.cache import CacheStore
from rkit.types import CacheSettings


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Return an empty workspace root directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def make_repo(workspace: Path) -> Callable[[str], Path]:
    """Return a factory creating ``<workspace>/<relative>/.git``."""

    def _make(relative: str) -> Path:
        repo = workspace / relative
        (repo / ".git").mkdir(parents=True)
        return repo

    return _make


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    """Return a cache file location outside the workspace."""
    return tmp_path / "state" / "cache.json"


@pytest.fixture
def cache_store(cache_path: Path) -> CacheStore:
    """Return an isolated cache store backed by ``cache_path``."""
    return CacheStore(CacheSettings(path=cache_path))
