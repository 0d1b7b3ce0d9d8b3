"""Parsing of clone URLs into ``domain/org/repo`` components."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

from rkit.constants.repository import GIT_URL_SUFFIX, HTTP_URL_PREFIXES
from rkit.exceptions import InvalidRepoUrl

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedRepoUrl:
    """Location of a repository inside the workspace layout."""

    domain: str
    org: str
    repo: str

    def target_dir(self, workspace_root: Path) -> Path:
        """Return ``workspace_root/domain/org/repo``."""
        return workspace_root / self.domain / self.org / self.repo


def trim_git_suffix(repo: str) -> str:
    return repo.removesuffix(GIT_URL_SUFFIX)


def parse_repo_url(url: str) -> ParsedRepoUrl:
    """Parse an HTTPS or SSH clone URL."""
    if url.startswith(HTTP_URL_PREFIXES):
        return _parse_https_url(url)
    if "@" in url:
        return _parse_ssh_url(url)
    raise InvalidRepoUrl("URL must be either HTTPS or SSH format")


def _parse_https_url(url: str) -> ParsedRepoUrl:
    try:
        parsed = urlsplit(url)
        domain = parsed.hostname
    except ValueError as exc:
        logger.error("Failed to parse HTTPS URL: %s", exc)
        raise InvalidRepoUrl(f"Failed to parse HTTPS URL: {exc}") from exc

    if not domain:
        logger.error("No domain found in HTTPS URL: %s", url)
        raise InvalidRepoUrl("No domain found in HTTPS URL")

    segments = [segment for segment in parsed.path.split("/") if segment]
    if len(segments) < 2:
        logger.error("HTTPS URL must contain organization and repository: %s", url)
        raise InvalidRepoUrl("HTTPS URL must contain organization and repository")

    return ParsedRepoUrl(domain=domain, org=segments[0], repo=trim_git_suffix(segments[1]))


def _parse_ssh_url(url: str) -> ParsedRepoUrl:
    host_part, separator, path = url.rpartition(":")
    if not separator:
        logger.error("Invalid SSH URL format (no path separator): %s", url)
        raise InvalidRepoUrl("Invalid SSH URL format (no path separator)")

    _, at, host = host_part.partition("@")
    if not at:
        logger.error("Invalid SSH URL format (no @ symbol): %s", url)
        raise InvalidRepoUrl("Invalid SSH URL format (no @ symbol)")

    # A port written as host:port leaves it in host_part.
    domain = host.split(":", 1)[0]
    if not domain:
        logger.error("No domain found in SSH URL: %s", url)
        raise InvalidRepoUrl("No domain found in SSH URL")

    parts = path.split("/")
    if len(parts) != 2 or not all(parts):
        logger.error("SSH URL must contain organization and repository: %s", url)
        raise InvalidRepoUrl("SSH URL must contain organization and repository")

    return ParsedRepoUrl(domain=domain, org=parts[0], repo=trim_git_suffix(parts[1]))
