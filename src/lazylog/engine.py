"""
structlog wiring used underneath every lazylog logger.

Each ``Logger`` owns an independent filtering bound logger built here, so
loggers never depend on structlog's global configuration. ``configure_structlog``
additionally aligns the global configuration so plain ``structlog.get_logger()``
callers share the same level, processors and sink.
"""

from __future__ import annotations

import sys
from typing import Any, List

import structlog
from structlog.typing import EventDict, FilteringBoundLogger, Processor, WrappedLogger

from .config import LoggingConfig
from .levels import Level


def _add_log_level(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    # lazylog passes its own label (trace, panic); plain structlog calls don't.
    event_dict.setdefault("level", "warning" if method_name == "warn" else method_name)
    return event_dict


_PRE_CHAIN: tuple[Processor, ...] = (
    _add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
)


def _build_renderer(json_output: bool) -> Processor:
    if json_output:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(
        colors=False, exception_formatter=structlog.dev.plain_traceback
    )


def build_processors(json_output: bool = False) -> List[Processor]:
    return [*_PRE_CHAIN, _build_renderer(json_output)]


def build_engine(
    level: Level,
    sink: Any = None,
    *,
    module: str = "",
    json_output: bool = False,
    discard: bool = False,
    **fields: Any,
) -> FilteringBoundLogger:
    """
    Build a structlog logger filtering below ``level``.

    Parameters
    ----------
    level:
        Minimum level emitted by the engine.
    sink:
        File-like object receiving rendered lines; ignored when ``discard``.
    module:
        Bound as the ``module`` field when non-empty.
    discard:
        Route output to ``structlog.ReturnLogger`` so nothing is written.
    """
    if discard:
        wrapped: WrappedLogger = structlog.ReturnLogger()
    else:
        wrapped = structlog.PrintLogger(file=sink if sink is not None else sys.stderr)
    if module:
        fields["module"] = module
    proxy = structlog.wrap_logger(
        wrapped,
        processors=build_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(level.engine_level),
    )
    return proxy.bind(**fields)


def configure_structlog(config: LoggingConfig) -> None:
    """Point structlog's global configuration at ``config``."""
    structlog.configure(
        processors=build_processors(config.json_output),
        wrapper_class=structlog.make_filtering_bound_logger(config.level.engine_level),
        logger_factory=structlog.PrintLoggerFactory(file=config.output()),
        cache_logger_on_first_use=False,
    )


__all__ = ["build_engine", "build_processors", "configure_structlog"]
