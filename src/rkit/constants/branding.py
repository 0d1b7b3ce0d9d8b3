"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "rkit"
CLI_DESCRIPTION: str = "Git repository workspace toolkit: clone, list, and inspect repositories"
INSPECT_SECTION_TEMPLATE: str = "=== {label} ==="
README_SECTION_LABEL: str = "README"
LISTING_SECTION_LABEL: str = "Directory Listing"
