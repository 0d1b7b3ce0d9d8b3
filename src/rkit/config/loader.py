"""Config loading and normalization for Rkit."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Any

import yaml

from rkit.config.model import RkitConfig
from rkit.config.paths import default_config_path
from rkit.constants.cache import DEFAULT_CACHE_TTL_SECONDS
from rkit.constants.config import (
    ALLOWED_CACHE_KEYS,
    ALLOWED_CONFIG_KEYS,
    ALLOWED_INSPECT_COMMAND_KEYS,
    CONFIG_TEMP_SUFFIX,
    DEFAULT_INSPECT_COMMANDS,
    DEFAULT_WORKSPACE_ROOT,
)
from rkit.exceptions import ConfigError
from rkit.io import write_text_atomic
from rkit.types.config import CacheSettings, InspectCommand
from rkit.utils import expand_user_path

logger = logging.getLogger(__name__)


def render_default_config() -> str:
    """Render the YAML document written on first run."""
    document = {
        "workspace_root": DEFAULT_WORKSPACE_ROOT,
        "inspect_commands": [dict(command) for command in DEFAULT_INSPECT_COMMANDS],
        "cache": {
            "ttl_seconds": DEFAULT_CACHE_TTL_SECONDS,
            "max_entries": None,
            "path": None,
        },
    }
    return yaml.safe_dump(document, sort_keys=False)


def load_or_create_config(config_path: Path | None = None) -> RkitConfig:
    """Load config from an explicit path, or from the default path creating it first."""
    if config_path is not None:
        path = config_path.resolve()
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        return load_config(path)

    path = default_config_path()
    if not path.exists():
        logger.info("Writing default configuration to %s", path)
        try:
            write_text_atomic(path=path, content=render_default_config(), temp_suffix=CONFIG_TEMP_SUFFIX)
        except OSError as exc:
            raise ConfigError(f"Failed to write file: {path} ({exc})") from exc
    return load_config(path)


def load_config(path: Path) -> RkitConfig:
    """Load and validate config from a YAML file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read file: {path} ({exc})") from exc

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    _reject_unknown_keys(raw, ALLOWED_CONFIG_KEYS, section="")

    workspace_root = raw.get("workspace_root", DEFAULT_WORKSPACE_ROOT)
    if not isinstance(workspace_root, str) or not workspace_root.strip():
        raise ConfigError("workspace_root must be a non-empty string")

    return RkitConfig(
        workspace_root=workspace_root.strip(),
        inspect_commands=_build_inspect_commands(raw.get("inspect_commands")),
        cache=_build_cache_settings(raw.get("cache")),
    )


def _build_inspect_commands(value: Any) -> tuple[InspectCommand, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigError("inspect_commands must be a list of {label, command} mappings")

    commands: list[InspectCommand] = []
    for index, item in enumerate(value):
        key_name = f"inspect_commands[{index}]"
        if not isinstance(item, dict):
            raise ConfigError(f"{key_name} must be a mapping")
        _reject_unknown_keys(item, ALLOWED_INSPECT_COMMAND_KEYS, section=key_name)
        label = item.get("label")
        command = item.get("command")
        if not isinstance(label, str) or not label.strip():
            raise ConfigError(f"{key_name}.label must be a non-empty string")
        if not isinstance(command, str):
            raise ConfigError(f"{key_name}.command must be a string")
        commands.append(InspectCommand(label=label.strip(), command=command))
    return tuple(commands)


def _build_cache_settings(value: Any) -> CacheSettings:
    if value is None:
        return CacheSettings()
    if not isinstance(value, dict):
        raise ConfigError("cache must be a mapping")
    _reject_unknown_keys(value, ALLOWED_CACHE_KEYS, section="cache")

    ttl_seconds = value.get("ttl_seconds", DEFAULT_CACHE_TTL_SECONDS)
    if not _is_positive_int(ttl_seconds):
        raise ConfigError("cache.ttl_seconds must be a positive integer")

    max_entries = value.get("max_entries")
    if max_entries is not None and not _is_positive_int(max_entries):
        raise ConfigError("cache.max_entries must be a positive integer or null")

    raw_path = value.get("path")
    if raw_path is not None and (not isinstance(raw_path, str) or not raw_path.strip()):
        raise ConfigError("cache.path must be a non-empty string or null")

    return CacheSettings(
        ttl_seconds=ttl_seconds,
        max_entries=max_entries,
        path=expand_user_path(raw_path.strip()) if raw_path is not None else None,
    )


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _reject_unknown_keys(raw: dict[Any, Any], allowed: frozenset[str], *, section: str) -> None:
    for key in raw:
        if key in allowed:
            continue
        location = f"{section}.{key}" if section else str(key)
        message = f"Unknown config key: {location}"
        suggestion = _suggest_key(str(key), allowed)
        if suggestion:
            message = f"{message} (did you mean '{suggestion}'?)"
        raise ConfigError(message)


def _suggest_key(unknown: str, allowed: frozenset[str]) -> str | None:
    """Return the closest allowed key for a typo, if any."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    return matches[0] if matches else None
