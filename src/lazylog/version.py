"""Installed lazylog version, read from the distribution metadata."""

from __future__ import annotations

from importlib import metadata

_DISTRIBUTION = "lazylog"


def get_version() -> str:
    """Version of the installed distribution, ``"unknown"`` when not installed."""
    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "unknown"


__version__ = get_version()

__all__ = ["__version__", "get_version"]
