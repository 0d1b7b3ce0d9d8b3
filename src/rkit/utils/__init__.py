"""Shared utility helpers."""

from __future__ import annotations

from .paths import display_path, expand_user_path, has_git_entry

__all__ = ["display_path", "expand_user_path", "has_git_entry"]
