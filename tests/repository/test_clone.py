"""Tests for cloning into the workspace layout."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

import pytest

from rkit.cache import CacheStore
from rkit.exceptions import GitCommandError, InvalidRepoUrl, RepoPermissionError
from rkit.repository import CommandResult, clone_repository


class FakeGit:
    """Records invocations and materializes the clone target."""

    def __init__(self, exit_status: int = 0, stderr: str = "") -> None:
        self.calls: list[list[str]] = []
        self.exit_status = exit_status
        self.stderr = stderr

    def __call__(self, argv: Sequence[str]) -> CommandResult:
        self.calls.append(list(argv))
        if self.exit_status == 0:
            (Path(argv[-1]) / ".git").mkdir(parents=True)
        return CommandResult(exit_status=self.exit_status, stdout="", stderr=self.stderr)


def test_clone_runs_git_into_canonical_target(workspace: Path, cache_store: CacheStore) -> None:
    runner = FakeGit()
    url = "https://github.com/octo/widgets.git"

    target = clone_repository(url, workspace, cache=cache_store, runner=runner)

    assert target == workspace / "github.com" / "octo" / "widgets"
    assert runner.calls == [["git", "clone", url, str(target)]]
    assert cache_store.get(target) is not None


def test_clone_without_cache(workspace: Path) -> None:
    target = clone_repository("git@github.com:octo/widgets.git", workspace, runner=FakeGit())

    assert (target / ".git").is_dir()


def test_git_failure_raises_with_stderr(workspace: Path, cache_store: CacheStore) -> None:
    runner = FakeGit(exit_status=128, stderr="fatal: repository not found\n")

    with pytest.raises(GitCommandError, match="status: 128: fatal: repository not found"):
        clone_repository("https://github.com/octo/missing", workspace, cache=cache_store, runner=runner)

    assert len(cache_store) == 0


def test_invalid_url_runs_nothing(workspace: Path) -> None:
    runner = FakeGit()

    with pytest.raises(InvalidRepoUrl):
        clone_repository("not a url", workspace, runner=runner)

    assert runner.calls == []


def test_cache_failure_does_not_fail_clone(workspace: Path, cache_store: CacheStore) -> None:
    def runner(argv: Sequence[str]) -> CommandResult:
        # git "succeeds" without leaving a repository behind
        Path(argv[-1]).mkdir(parents=True)
        return CommandResult(exit_status=0, stdout="", stderr="")

    target = clone_repository("https://github.com/octo/widgets", workspace, cache=cache_store, runner=runner)

    assert target.is_dir()
    assert len(cache_store) == 0


@pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
def test_unwritable_parent_raises_permission_error(workspace: Path) -> None:
    parent = workspace / "github.com" / "octo"
    parent.mkdir(parents=True)
    parent.chmod(0o500)
    try:
        with pytest.raises(RepoPermissionError):
            clone_repository("https://github.com/octo/widgets", workspace, runner=FakeGit())
    finally:
        parent.chmod(0o755)
