"""
Lazy, module-scoped logging on top of structlog.

Typical use::

    import lazylog

    lazylog.initialize(lazylog.LoggingConfig(level="info", modules={"db": "debug"}))
    log = lazylog.get_logger("db")
    log.debug("row %s", lazylog.as_json(row))
    log.error("query failed", err=exc)
"""

from .config import LoggingConfig, ModuleConfig
from .deferred import Deferred, as_error, as_iso_time, as_json, defer, last
from .errors import LazylogError, LoggerPanic, RegistryNotInitializedError, StructuredError
from .formatters import INVALID, Formatter, Stringify, TimeLike, to_iso_time, to_json
from .levels import (
    DEFAULT_LEVEL,
    LEVEL_DEBUG,
    LEVEL_ERROR,
    LEVEL_FATAL,
    LEVEL_INFO,
    LEVEL_PANIC,
    LEVEL_TRACE,
    LEVEL_WARN,
    Level,
    parse_level,
)
from .logger import FATAL_EXIT_CODE, Logger
from .registry import FormatterRegistry
from .runtime import (
    LoggingRuntime,
    configure,
    get_formatter,
    get_logger,
    get_logger_by_package,
    get_root,
    initialize,
    initialize_from_settings,
    set_formatter,
)
from .settings import LoggingSettings, load_settings
from .version import __version__

__all__ = [
    "DEFAULT_LEVEL",
    "Deferred",
    "FATAL_EXIT_CODE",
    "Formatter",
    "FormatterRegistry",
    "INVALID",
    "LEVEL_DEBUG",
    "LEVEL_ERROR",
    "LEVEL_FATAL",
    "LEVEL_INFO",
    "LEVEL_PANIC",
    "LEVEL_TRACE",
    "LEVEL_WARN",
    "LazylogError",
    "Level",
    "Logger",
    "LoggerPanic",
    "LoggingConfig",
    "LoggingRuntime",
    "LoggingSettings",
    "ModuleConfig",
    "RegistryNotInitializedError",
    "Stringify",
    "StructuredError",
    "TimeLike",
    "__version__",
    "as_error",
    "as_iso_time",
    "as_json",
    "configure",
    "defer",
    "get_formatter",
    "get_logger",
    "get_logger_by_package",
    "get_root",
    "initialize",
    "initialize_from_settings",
    "last",
    "load_settings",
    "parse_level",
    "set_formatter",
    "to_iso_time",
    "to_json",
]
