"""Tests for atomic JSON and text IO helpers."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from rkit.io import load_json_file, temp_path_for, write_json_atomic, write_text_atomic


def test_write_json_atomic_cleans_temp_file_on_error(tmp_path: Path) -> None:
    out_path = tmp_path / "cache.json"

    with pytest.raises(TypeError):
        write_json_atomic(path=out_path, payload={"bad": object()}, temp_suffix=".tmp")

    assert list(tmp_path.iterdir()) == []


def test_failed_rename_keeps_previous_file(tmp_path: Path) -> None:
    out_path = tmp_path / "cache.json"
    write_json_atomic(path=out_path, payload={"version": 1}, temp_suffix=".tmp")

    with patch("rkit.io.json_io.os.replace", side_effect=OSError("rename failed")):
        with pytest.raises(OSError, match="rename failed"):
            write_json_atomic(path=out_path, payload={"version": 2}, temp_suffix=".tmp")

    assert load_json_file(out_path) == {"version": 1}
    assert not temp_path_for(out_path, ".tmp").exists()


def test_write_json_atomic_creates_parents_and_sorts_keys(tmp_path: Path) -> None:
    out_path = tmp_path / "a" / "b" / "cache.json"

    write_json_atomic(path=out_path, payload={"b": 1, "a": 2}, temp_suffix=".tmp")

    text = out_path.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert list(json.loads(text)) == ["a", "b"]


def test_temp_path_is_a_sibling(tmp_path: Path) -> None:
    assert temp_path_for(tmp_path / "cache.json", ".tmp") == tmp_path / "cache.json.tmp"


def test_write_text_atomic_replaces_content(tmp_path: Path) -> None:
    out_path = tmp_path / "config.yaml"
    out_path.write_text("old\n", encoding="utf-8")

    write_text_atomic(path=out_path, content="new\n", temp_suffix=".tmp")

    assert out_path.read_text(encoding="utf-8") == "new\n"
