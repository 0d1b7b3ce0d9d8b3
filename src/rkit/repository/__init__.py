"""Cloning, URL parsing, and inspection of workspace repositories."""

from __future__ import annotations

from .clone import clone_repository
from .process import CommandResult, run_command
from .url import ParsedRepoUrl, parse_repo_url, trim_git_suffix
from .view import InspectSection, inspect_repository, render_sections

__all__ = [
    "CommandResult",
    "InspectSection",
    "ParsedRepoUrl",
    "clone_repository",
    "inspect_repository",
    "parse_repo_url",
    "render_sections",
    "run_command",
    "trim_git_suffix",
]
