"""Subprocess execution returning captured output."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from rkit.exceptions import ShellCommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured output of a finished command."""

    exit_status: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_status == 0


type CommandRunner = Callable[[Sequence[str]], CommandResult]


def run_command(argv: Sequence[str], *, cwd: Path | None = None) -> CommandResult:
    """Run *argv* to completion and capture its output."""
    command = " ".join(argv)
    logger.debug("Running command: %s", command)
    try:
        completed = subprocess.run(
            list(argv),
            cwd=cwd,
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise ShellCommandError(command, exc) from exc
    return CommandResult(exit_status=completed.returncode, stdout=completed.stdout, stderr=completed.stderr)
