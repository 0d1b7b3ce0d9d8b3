"""Root exception type for Rkit."""

from __future__ import annotations


class RkitError(Exception):
    """Base class for every error raised by Rkit."""
