"""Git workspace toolkit: clone, list, and inspect repositories."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

from rkit.constants.branding import BRAND_NAME

__all__ = ["__version__"]


def _installed_version() -> str:
    try:
        return version(BRAND_NAME)
    except PackageNotFoundError:
        # Running from a source checkout without an install.
        return "0.0.0"


__version__ = _installed_version()

logging.getLogger(__name__).addHandler(logging.NullHandler())
