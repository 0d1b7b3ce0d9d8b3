"""Cache document loading and persistence."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TypeGuard

from rkit.constants.cache import CACHE_TEMP_SUFFIX, CACHE_VERSION
from rkit.exceptions import CorruptCache, SchemaMismatch
from rkit.io import load_json_file, write_json_atomic
from rkit.types import CacheDocument, CacheEntry

logger = logging.getLogger(__name__)


def new_cache_document() -> CacheDocument:
    """Return an empty cache document."""
    return {
        "version": CACHE_VERSION,
        "entries": {},
    }


def read_cache_document(cache_path: Path) -> CacheDocument:
    """Read and normalize the cache document at *cache_path*.

    A missing file yields an empty document. Raises ``CorruptCache`` when the
    file cannot be read or parsed and ``SchemaMismatch`` when its version is
    not the supported one.
    """
    if not cache_path.exists():
        return new_cache_document()

    try:
        payload = load_json_file(cache_path)
    except (OSError, ValueError) as exc:
        raise CorruptCache(f"Failed to parse cache file {cache_path}: {exc}") from exc
    except RecursionError as exc:
        raise CorruptCache(f"Failed to parse cache file {cache_path}: nesting too deep") from exc

    if not isinstance(payload, dict):
        raise CorruptCache(f"Cache file {cache_path} must contain a JSON object")

    version = payload.get("version")
    if isinstance(version, bool) or version != CACHE_VERSION:
        raise SchemaMismatch(version, CACHE_VERSION)

    raw_entries = payload.get("entries")
    if not isinstance(raw_entries, dict):
        raise CorruptCache(f"Cache file {cache_path} has no entries mapping")

    return {
        "version": CACHE_VERSION,
        "entries": _normalize_entries(raw_entries),
    }


def load_cache_entries(cache_path: Path) -> dict[str, CacheEntry]:
    """Load cached entries, starting empty on any schema or parse problem."""
    try:
        document = read_cache_document(cache_path)
    except (SchemaMismatch, CorruptCache) as exc:
        logger.warning("Failed to load cache: %s", exc)
        return {}
    return document["entries"]


def save_cache_document(cache_path: Path, entries: dict[str, CacheEntry]) -> None:
    """Persist the full entry set to disk atomically."""
    document: CacheDocument = {
        "version": CACHE_VERSION,
        "entries": entries,
    }
    write_json_atomic(path=cache_path, payload=document, temp_suffix=CACHE_TEMP_SUFFIX)


def _normalize_entries(raw_entries: dict[object, object]) -> dict[str, CacheEntry]:
    entries: dict[str, CacheEntry] = {}
    for key, value in raw_entries.items():
        if not isinstance(key, str) or not isinstance(value, dict):
            continue

        path = value.get("path")
        last_modified = value.get("last_modified")
        last_checked = value.get("last_checked")

        if not isinstance(path, str):
            continue
        if not _is_timestamp(last_modified) or not _is_timestamp(last_checked):
            continue

        entries[key] = {
            "path": path,
            "last_modified": last_modified,
            "last_checked": last_checked,
        }
    return entries


def _is_timestamp(value: object) -> TypeGuard[int]:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
