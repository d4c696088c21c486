"""
Severity levels understood by lazylog loggers.

structlog only knows the stdlib levels, so ``trace`` and ``panic`` are mapped
onto the closest stdlib filter level while keeping their own label.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Dict, Optional, Union


class Level(IntEnum):
    """Ordered severity levels, least severe first."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50
    PANIC = 60

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def method_name(self) -> str:
        """Name of the structlog bound logger method used to emit this level."""
        return _METHOD_NAMES[self]

    @property
    def engine_level(self) -> int:
        """Stdlib numeric level handed to ``make_filtering_bound_logger``."""
        return _ENGINE_LEVELS[self]


LEVEL_TRACE = Level.TRACE.label
LEVEL_DEBUG = Level.DEBUG.label
LEVEL_INFO = Level.INFO.label
LEVEL_WARN = Level.WARN.label
LEVEL_ERROR = Level.ERROR.label
LEVEL_FATAL = Level.FATAL.label
LEVEL_PANIC = Level.PANIC.label

DEFAULT_LEVEL = Level.TRACE

LevelLike = Union[Level, str, int]

_METHOD_NAMES: Dict[Level, str] = {
    Level.TRACE: "debug",
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warning",
    Level.ERROR: "error",
    Level.FATAL: "critical",
    Level.PANIC: "critical",
}

# structlog has no filtering class below DEBUG.
_ENGINE_LEVELS: Dict[Level, int] = {
    Level.TRACE: logging.NOTSET,
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
    Level.FATAL: logging.CRITICAL,
    Level.PANIC: logging.CRITICAL,
}

_ALIASES: Dict[str, Level] = {
    "warning": Level.WARN,
    "critical": Level.FATAL,
}


def try_parse_level(value: LevelLike) -> Optional[Level]:
    """Return the level named by ``value`` or ``None`` when it is not a level."""
    if isinstance(value, Level):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            return Level(value)
        except ValueError:
            return None
    if isinstance(value, str):
        name = value.strip().lower()
        if name in _ALIASES:
            return _ALIASES[name]
        try:
            return Level[name.upper()]
        except KeyError:
            return None
    return None


def parse_level(value: LevelLike, default: Level = DEFAULT_LEVEL) -> Level:
    """
    Parse a level name, falling back to ``default`` for unknown values.

    Parameters
    ----------
    value:
        Level instance, case-insensitive name (``"warning"`` and ``"critical"``
        are accepted as aliases) or numeric value.
    default:
        Level returned when ``value`` does not name a level.
    """
    level = try_parse_level(value)
    return default if level is None else level


__all__ = [
    "DEFAULT_LEVEL",
    "LEVEL_DEBUG",
    "LEVEL_ERROR",
    "LEVEL_FATAL",
    "LEVEL_INFO",
    "LEVEL_PANIC",
    "LEVEL_TRACE",
    "LEVEL_WARN",
    "Level",
    "LevelLike",
    "parse_level",
    "try_parse_level",
]
