"""Tests for path rendering helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from rkit.utils import display_path, expand_user_path


@pytest.mark.parametrize(
    ("path", "full", "expected"),
    [
        pytest.param("/ws/github.com/octo/widgets", False, "github.com/octo/widgets", id="relative"),
        pytest.param("/ws", False, ".", id="root"),
        pytest.param("/ws/a", True, "/ws/a", id="full"),
        pytest.param("/elsewhere/a", False, "/elsewhere/a", id="outside-root"),
    ],
)
def test_display_path(path: str, full: bool, expected: str) -> None:
    assert display_path(Path(path), Path("/ws"), full=full) == expected


def test_expand_user_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("RKIT_TEST_DIR", "code")

    assert expand_user_path("~/$RKIT_TEST_DIR") == tmp_path / "code"
