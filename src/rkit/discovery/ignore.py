"""``.gitignore``-style ignore files for the repository walk.

Each listed directory may contribute rules; a rule only sees paths below the
directory that holds it. Deeper files take precedence over shallower ones,
and within one file the last matching pattern wins, so ``!pattern``
re-includes what an earlier line excluded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pathspec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IgnoreRule:
    """Patterns from one ignore file, anchored at its directory."""

    base: Path
    spec: pathspec.GitIgnoreSpec

    def match(self, path: Path, *, is_dir: bool) -> bool | None:
        """Return True/False for ignored/re-included, None when no pattern applies."""
        try:
            relative = path.relative_to(self.base).as_posix()
        except ValueError:
            return None
        if is_dir:
            relative += "/"

        result: bool | None = None
        for pattern in self.spec.patterns:
            if pattern.include is None:
                continue
            if pattern.match_file(relative) is not None:
                result = pattern.include
        return result


@dataclass(frozen=True)
class IgnoreStack:
    """Ignore rules in effect for one directory, outermost first."""

    rules: tuple[IgnoreRule, ...] = ()

    def extended(self, rule: IgnoreRule | None) -> IgnoreStack:
        if rule is None:
            return self
        return IgnoreStack(self.rules + (rule,))

    def is_ignored(self, path: Path, *, is_dir: bool) -> bool:
        for rule in reversed(self.rules):
            verdict = rule.match(path, is_dir=is_dir)
            if verdict is not None:
                return verdict
        return False


def read_ignore_file(path: Path) -> IgnoreRule | None:
    """Parse the ignore file at *path*; None when it holds no patterns.

    Raises ``OSError`` when the file cannot be read.
    """
    lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
    spec = pathspec.GitIgnoreSpec.from_lines(lines)
    if not any(pattern.include is not None for pattern in spec.patterns):
        return None
    logger.debug("Loaded ignore rules from %s", path)
    return IgnoreRule(base=path.parent, spec=spec)
