"""Platform-specific locations for the config and cache files."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from rkit.constants.cache import CACHE_FILENAME
from rkit.constants.config import APP_DIRNAME, CONFIG_FILENAME
from rkit.exceptions import ConfigError

logger = logging.getLogger(__name__)


def config_dir() -> Path:
    """Return ``%APPDATA%\\rkit`` on Windows and ``~/.config/rkit`` elsewhere."""
    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        if not appdata:
            raise ConfigError("Could not find config directory: APPDATA is not set")
        return Path(appdata) / APP_DIRNAME

    try:
        home = Path.home()
    except RuntimeError as exc:
        raise ConfigError("Could not find home directory") from exc
    return home / ".config" / APP_DIRNAME


def default_config_path() -> Path:
    """Return the default config file location."""
    return config_dir() / CONFIG_FILENAME


def default_cache_path() -> Path:
    """Return a usable cache file location, falling back to the temp directory."""
    try:
        path = config_dir() / CACHE_FILENAME
        prepare_cache_path(path)
        return path
    except (ConfigError, OSError) as exc:
        logger.warning("Failed to get cache path: %s", exc)

    fallback = Path(tempfile.gettempdir()) / APP_DIRNAME / CACHE_FILENAME
    try:
        prepare_cache_path(fallback)
    except (ConfigError, OSError) as exc:
        logger.error("Failed to validate temp cache path: %s", exc)
    return fallback


def prepare_cache_path(path: Path) -> None:
    """Create the parent directory of *path* and check it is not a directory itself."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists() and not path.is_file():
        raise ConfigError(f"Cache path exists but is not a file: {path}")
