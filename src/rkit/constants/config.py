"""Configuration defaults and filenames."""

from __future__ import annotations

APP_DIRNAME: str = "rkit"
CONFIG_FILENAME: str = "config.yaml"
CONFIG_TEMP_SUFFIX: str = ".tmp"

DEFAULT_WORKSPACE_ROOT: str = "~/projects"

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset({"workspace_root", "inspect_commands", "cache"})
ALLOWED_CACHE_KEYS: frozenset[str] = frozenset({"ttl_seconds", "max_entries", "path"})
ALLOWED_INSPECT_COMMAND_KEYS: frozenset[str] = frozenset({"label", "command"})

DEFAULT_INSPECT_COMMANDS: tuple[dict[str, str], ...] = (
    {"label": "Status", "command": "git -C {REPO} status --short --branch"},
    {"label": "Recent commits", "command": "git -C {REPO} log --oneline -n 5"},
    {"label": "Remotes", "command": "git -C {REPO} remote -v"},
)
