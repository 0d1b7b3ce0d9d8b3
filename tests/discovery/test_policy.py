"""Tests for the pure per-entry walk policy."""

from __future__ import annotations

import pytest

from rkit.discovery import EntryFacts, Verdict, WalkDecision, WalkerConfig, decide_entry

CONTINUE = WalkDecision.CONTINUE
SKIP = WalkDecision.SKIP_SUBTREE
QUIT = WalkDecision.QUIT


def _dir(name: str = "project", depth: int = 1, **overrides: object) -> EntryFacts:
    return EntryFacts(name=name, depth=depth, is_dir=True, **overrides)  # type: ignore[arg-type]


def test_plain_directory_is_descended() -> None:
    assert decide_entry(_dir(), WalkerConfig(), 0) == Verdict(CONTINUE, emit=False)


def test_repository_is_emitted_and_not_descended_by_default() -> None:
    assert decide_entry(_dir(is_repo=True), WalkerConfig(), 0) == Verdict(SKIP, emit=True)


def test_repository_is_descended_when_configured() -> None:
    config = WalkerConfig(stop_descending_into_repos=False)

    assert decide_entry(_dir(is_repo=True), config, 0) == Verdict(CONTINUE, emit=True)


def test_files_and_git_dirs_are_skipped() -> None:
    config = WalkerConfig()

    assert decide_entry(EntryFacts(name="README.md", depth=1, is_dir=False), config, 0).decision is SKIP
    assert decide_entry(_dir(name=".git"), config, 0) == Verdict(SKIP)


def test_symlinked_directory_skipped_unless_following() -> None:
    link = _dir(is_symlink=True, is_repo=True)

    assert decide_entry(link, WalkerConfig(), 0) == Verdict(SKIP)
    assert decide_entry(link, WalkerConfig(follow_symlinks=True), 0) == Verdict(SKIP, emit=True)


def test_other_filesystem_skipped_when_staying_on_one() -> None:
    mounted = _dir(is_repo=True, device=2, root_device=1)

    assert decide_entry(mounted, WalkerConfig(), 0) == Verdict(SKIP)
    assert decide_entry(mounted, WalkerConfig(stay_on_filesystem=False), 0).emit


def test_unknown_device_is_not_treated_as_foreign() -> None:
    assert decide_entry(_dir(device=None, root_device=1), WalkerConfig(), 0).decision is CONTINUE


@pytest.mark.parametrize(
    ("depth", "expected"),
    [(2, Verdict(SKIP, emit=True)), (3, Verdict(SKIP))],
)
def test_entries_beyond_max_depth_are_skipped(depth: int, expected: Verdict) -> None:
    config = WalkerConfig(max_depth=2)

    assert decide_entry(_dir(depth=depth, is_repo=True), config, 0) == expected


def test_unbounded_depth() -> None:
    config = WalkerConfig(max_depth=None)

    assert decide_entry(_dir(depth=500), config, 0).decision is CONTINUE


def test_quits_once_match_limit_reached() -> None:
    config = WalkerConfig(max_repos=2)

    assert decide_entry(_dir(is_repo=True), config, 1) == Verdict(SKIP, emit=True)
    assert decide_entry(_dir(is_repo=True), config, 2) == Verdict(QUIT)
    assert decide_entry(EntryFacts(name="file", depth=1, is_dir=False), config, 2) == Verdict(QUIT)


@pytest.mark.parametrize(
    "kwargs",
    [{"worker_count": 0}, {"max_depth": -1}, {"max_repos": -1}],
)
def test_walker_config_rejects_invalid_values(kwargs: dict[str, int]) -> None:
    with pytest.raises(ValueError):
        WalkerConfig(**kwargs)


def test_walker_config_defaults() -> None:
    config = WalkerConfig()

    assert config.max_depth == 10
    assert not config.follow_symlinks
    assert config.stay_on_filesystem
    assert config.worker_count >= 1
    assert config.max_repos is None
    assert config.stop_descending_into_repos
    assert config.respect_ignore_files


def test_ignored_directory_is_skipped_even_if_repository() -> None:
    ignored = _dir(is_repo=True, is_ignored=True)

    assert decide_entry(ignored, WalkerConfig(), 0) == Verdict(SKIP)
    assert decide_entry(ignored, WalkerConfig(respect_ignore_files=False), 0) == Verdict(SKIP, emit=True)
