"""Typed cache payload structures."""

from __future__ import annotations

from typing import TypedDict


class CacheEntry(TypedDict):
    """A previously observed repository and when it was last confirmed."""

    path: str
    last_modified: int
    last_checked: int


class CacheDocument(TypedDict):
    """Top-level cache payload persisted to disk."""

    version: int
    entries: dict[str, CacheEntry]
