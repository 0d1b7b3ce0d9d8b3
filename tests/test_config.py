"""Tests for config loading, validation, and default locations."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from rkit.config import default_cache_path, load_config, load_or_create_config, render_default_config
from rkit.config import paths as config_paths
from rkit.exceptions import ConfigError
from rkit.types import CacheSettings, InspectCommand


def _write_config(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


def test_default_config_created_on_first_run(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    config = load_or_create_config()

    config_file = tmp_path / ".config" / "rkit" / "config.yaml"
    assert config_file.is_file()
    assert config.workspace_root == "~/projects"
    assert config.expanded_workspace_root() == tmp_path / "projects"
    assert [command.label for command in config.inspect_commands] == ["Status", "Recent commits", "Remotes"]
    assert config.cache == CacheSettings()


def test_existing_default_config_is_not_overwritten(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    config_file = tmp_path / ".config" / "rkit" / "config.yaml"
    config_file.parent.mkdir(parents=True)
    _write_config(config_file, "workspace_root: /srv/code\n")

    assert load_or_create_config().workspace_root == "/srv/code"
    assert config_file.read_text(encoding="utf-8") == "workspace_root: /srv/code\n"


def test_explicit_missing_config_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Config file not found"):
        load_or_create_config(tmp_path / "missing.yaml")


def test_rendered_default_round_trips() -> None:
    document = yaml.safe_load(render_default_config())

    assert document["workspace_root"] == "~/projects"
    assert document["cache"] == {"ttl_seconds": 86400, "max_entries": None, "path": None}


def test_full_config_is_parsed(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RKIT_TEST_STATE", str(tmp_path / "state"))
    path = _write_config(
        tmp_path / "config.yaml",
        """
workspace_root: ~/src
inspect_commands:
  - label: " Log "
    command: git -C {REPO} log -1
cache:
  ttl_seconds: 60
  max_entries: 100
  path: $RKIT_TEST_STATE/cache.json
""",
    )

    config = load_config(path)

    assert config.workspace_root == "~/src"
    assert config.inspect_commands == (InspectCommand(label="Log", command="git -C {REPO} log -1"),)
    assert config.cache.ttl_seconds == 60
    assert config.cache.max_entries == 100
    assert config.cache.path == tmp_path / "state" / "cache.json"


def test_empty_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(_write_config(tmp_path / "config.yaml", ""))

    assert config.workspace_root == "~/projects"
    assert config.inspect_commands == ()


@pytest.mark.parametrize(
    ("body", "message"),
    [
        pytest.param("workspace_rot: ~/x\n", "did you mean 'workspace_root'", id="top-level-typo"),
        pytest.param("cache:\n  ttl_second: 5\n", "cache.ttl_second", id="cache-typo"),
        pytest.param("cache:\n  ttl_seconds: 0\n", "ttl_seconds must be a positive integer", id="zero-ttl"),
        pytest.param("cache:\n  ttl_seconds: true\n", "ttl_seconds", id="bool-ttl"),
        pytest.param("cache:\n  max_entries: -1\n", "max_entries", id="negative-max"),
        pytest.param("cache: []\n", "cache must be a mapping", id="cache-list"),
        pytest.param("workspace_root: ''\n", "workspace_root", id="empty-root"),
        pytest.param("inspect_commands: {}\n", "inspect_commands must be a list", id="commands-mapping"),
        pytest.param("inspect_commands:\n  - label: x\n", "inspect_commands[0].command", id="missing-command"),
        pytest.param("- a\n- b\n", "must be a YAML mapping", id="top-level-list"),
        pytest.param("workspace_root: [unclosed\n", "Invalid YAML", id="bad-yaml"),
    ],
)
def test_invalid_config_is_rejected(tmp_path: Path, body: str, message: str) -> None:
    path = _write_config(tmp_path / "config.yaml", body)

    with pytest.raises(ConfigError) as exc_info:
        load_config(path)

    assert message in str(exc_info.value)


def test_default_cache_path_under_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    path = default_cache_path()

    assert path == tmp_path / ".config" / "rkit" / "cache.json"
    assert path.parent.is_dir()


def test_default_cache_path_falls_back_to_temp_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def no_config_dir() -> Path:
        raise ConfigError("Could not find home directory")

    monkeypatch.setattr(config_paths, "config_dir", no_config_dir)
    monkeypatch.setattr(config_paths.tempfile, "gettempdir", lambda: str(tmp_path))

    assert default_cache_path() == tmp_path / "rkit" / "cache.json"


def test_prepare_cache_path_rejects_directory(tmp_path: Path) -> None:
    (tmp_path / "cache.json").mkdir()

    with pytest.raises(ConfigError, match="not a file"):
        config_paths.prepare_cache_path(tmp_path / "cache.json")
