"""Config data model for Rkit."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from rkit.constants.config import DEFAULT_WORKSPACE_ROOT
from rkit.types.config import CacheSettings, InspectCommand
from rkit.utils import expand_user_path


@dataclass(frozen=True)
class RkitConfig:
    """Resolved tool configuration."""

    workspace_root: str = DEFAULT_WORKSPACE_ROOT
    inspect_commands: tuple[InspectCommand, ...] = ()
    cache: CacheSettings = field(default_factory=CacheSettings)

    def expanded_workspace_root(self) -> Path:
        """Workspace root with ``~`` and environment variables expanded."""
        return expand_user_path(self.workspace_root)
