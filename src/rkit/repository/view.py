"""Repository inspection through configured command templates."""

from __future__ import annotations

import logging
import os
import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from rkit.constants.branding import INSPECT_SECTION_TEMPLATE, LISTING_SECTION_LABEL, README_SECTION_LABEL
from rkit.constants.discovery import GIT_DIR_NAME
from rkit.constants.repository import README_FILENAME, REPO_PLACEHOLDER
from rkit.exceptions import NotARepository, RepoNotFound, RepoPermissionError
from rkit.repository.process import CommandRunner, run_command
from rkit.types import InspectCommand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InspectSection:
    """One labelled block of ``rkit view`` output."""

    label: str
    body: str
    exit_status: int = 0


def inspect_repository(
    repo_path: Path,
    commands: Sequence[InspectCommand] = (),
    *,
    runner: CommandRunner = run_command,
) -> list[InspectSection]:
    """Collect inspection output for *repo_path*.

    Runs each configured command with ``{REPO}`` replaced by the repository
    path. Without commands, shows the README or falls back to a listing.
    """
    _check_repository(repo_path)

    if not commands:
        return [_readme_or_listing(repo_path)]

    sections: list[InspectSection] = []
    for command in commands:
        rendered = command.command.replace(REPO_PLACEHOLDER, str(repo_path))
        try:
            argv = shlex.split(rendered)
        except ValueError as exc:
            logger.warning("Unparseable command for label %s: %s", command.label, exc)
            continue
        if not argv:
            logger.warning("Empty command for label: %s", command.label)
            continue

        logger.debug("Running command for %s: %s", command.label, rendered)
        result = runner(argv)
        if not result.ok:
            logger.warning("Command '%s' exited with status: %s", command.command, result.exit_status)
        sections.append(
            InspectSection(
                label=command.label,
                body=result.stdout + result.stderr,
                exit_status=result.exit_status,
            )
        )
    return sections


def render_sections(sections: Sequence[InspectSection]) -> str:
    """Render sections as ``=== label ===`` blocks separated by blank lines."""
    blocks = []
    for section in sections:
        header = INSPECT_SECTION_TEMPLATE.format(label=section.label)
        blocks.append(f"{header}\n{section.body.rstrip()}\n")
    return "\n".join(blocks)


def _check_repository(repo_path: Path) -> None:
    if not repo_path.exists():
        logger.error("Repository not found: %s", repo_path)
        raise RepoNotFound(repo_path)
    if not (repo_path / GIT_DIR_NAME).exists():
        logger.error("Not a git repository: %s", repo_path)
        raise NotARepository(repo_path)
    if not os.access(repo_path, os.R_OK | os.X_OK):
        logger.error("No permission to read directory: %s", repo_path)
        raise RepoPermissionError(f"No permission to read directory: {repo_path}")


def _readme_or_listing(repo_path: Path) -> InspectSection:
    readme_path = repo_path / README_FILENAME
    if readme_path.is_file():
        logger.info("Displaying README for %s", repo_path)
        try:
            content = readme_path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise RepoPermissionError(f"Failed to read file: {readme_path} ({exc})") from exc
        return InspectSection(label=README_SECTION_LABEL, body=content)

    logger.info("Listing directory contents for %s", repo_path)
    names = sorted(f"{child.name}/" if child.is_dir() else child.name for child in repo_path.iterdir())
    return InspectSection(label=LISTING_SECTION_LABEL, body="\n".join(names))
