"""JSON read/write helpers with atomic persistence."""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from contextlib import suppress
from pathlib import Path
from typing import TextIO

from rkit.types.common import JsonValue


def load_json_file(path: Path) -> JsonValue:
    """Load and parse JSON from disk."""
    return json.loads(path.read_text(encoding="utf-8"))


def temp_path_for(path: Path, temp_suffix: str) -> Path:
    """Return the sibling temp file used while replacing *path*."""
    return path.with_name(path.name + temp_suffix)


def write_json_atomic(*, path: Path, payload: object, temp_suffix: str) -> None:
    """Persist JSON atomically by writing to a temp file then renaming."""

    def _dump(handle: TextIO) -> None:
        json.dump(payload, handle, indent=2, sort_keys=True)
        handle.write("\n")

    _write_atomic(path=path, temp_suffix=temp_suffix, writer=_dump)


def write_text_atomic(*, path: Path, content: str, temp_suffix: str) -> None:
    """Persist text atomically by writing to a temp file then renaming."""
    _write_atomic(path=path, temp_suffix=temp_suffix, writer=lambda handle: handle.write(content))


def _write_atomic(*, path: Path, temp_suffix: str, writer: Callable[[TextIO], object]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = temp_path_for(path, temp_suffix)

    try:
        with temp_path.open("w", encoding="utf-8") as handle:
            writer(handle)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, path)
    except BaseException:
        with suppress(FileNotFoundError):
            temp_path.unlink()
        raise
