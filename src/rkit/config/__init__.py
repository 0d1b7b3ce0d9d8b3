"""Configuration loading, validation, and default locations."""

from __future__ import annotations

from rkit.config.loader import load_config, load_or_create_config, render_default_config
from rkit.config.model import RkitConfig
from rkit.config.paths import config_dir, default_cache_path, default_config_path

__all__ = [
    "RkitConfig",
    "config_dir",
    "default_cache_path",
    "default_config_path",
    "load_config",
    "load_or_create_config",
    "render_default_config",
]
