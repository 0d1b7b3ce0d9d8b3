"""Configuration-related exceptions."""

from __future__ import annotations

from rkit.exceptions.base import RkitError


class ConfigError(RkitError, ValueError):
    """Raised when configuration is invalid or cannot be loaded."""
