"""Shared type aliases for Rkit."""

from .cache import CacheDocument, CacheEntry
from .common import JsonScalar, JsonValue
from .config import CacheSettings, InspectCommand

__all__ = [
    "CacheDocument",
    "CacheEntry",
    "CacheSettings",
    "InspectCommand",
    "JsonScalar",
    "JsonValue",
]
