"""
Logger facade.

A ``Logger`` filters by level first and only then refines its arguments:
``Deferred`` values are materialized and values with a registered formatter
are rendered, everything else reaches structlog untouched. Nothing is
serialized for lines that are not emitted.
"""

from __future__ import annotations

import os
import sys
from typing import Any, Callable, Optional, Sequence, Tuple

from structlog.typing import FilteringBoundLogger

from .deferred import Deferred, as_error
from .errors import LoggerPanic
from .formatters import INVALID, Formatter
from .levels import Level, LevelLike, try_parse_level

FATAL_EXIT_CODE = 1

FormatterLookup = Callable[[type], Tuple[Optional[Formatter], bool]]
ExitFunc = Callable[[int], None]


def exit_process(code: int, sink: Any = None) -> None:
    """Flush ``sink`` and the standard streams, then end the whole process."""
    for stream in (sink, sys.stdout, sys.stderr):
        flush = getattr(stream, "flush", None)
        if flush is None:
            continue
        try:
            flush()
        except (OSError, ValueError):
            # closed stream
            continue
    os._exit(code)


def _format_message(fmt: str, args: Tuple[Any, ...]) -> str:
    if not args:
        return fmt
    try:
        return fmt % args
    except (TypeError, ValueError):
        return f"{fmt} {INVALID}"


class Logger:
    """Level-bound logger for one module, safe to share between threads."""

    __slots__ = ("_engine", "_level", "_module", "_lookups", "_stack_traces", "_exit")

    def __init__(
        self,
        engine: FilteringBoundLogger,
        level: Level,
        module: str = "",
        lookups: Sequence[FormatterLookup] = (),
        stack_traces: bool = True,
        exit_func: Optional[ExitFunc] = None,
    ) -> None:
        self._engine = engine
        self._level = level
        self._module = module
        self._lookups = tuple(lookups)
        self._stack_traces = stack_traces
        self._exit = exit_func or exit_process

    @property
    def module(self) -> str:
        return self._module

    @property
    def level(self) -> Level:
        return self._level

    def __repr__(self) -> str:
        return f"Logger(module={self._module!r}, level={self._level.label!r})"

    def is_level(self, level: LevelLike) -> bool:
        """True only when ``level`` is exactly the configured level."""
        return try_parse_level(level) is self._level

    def is_enabled_for(self, level: LevelLike) -> bool:
        """True when a call at ``level`` would be emitted."""
        parsed = try_parse_level(level)
        return parsed is not None and parsed >= self._level

    def bind(self, **fields: Any) -> "Logger":
        """Return a logger carrying extra structured fields on every line."""
        return Logger(
            self._engine.bind(**fields),
            self._level,
            module=self._module,
            lookups=self._lookups,
            stack_traces=self._stack_traces,
            exit_func=self._exit,
        )

    def trace(self, fmt: str, *args: Any) -> None:
        self._emit(Level.TRACE, fmt, args)

    def debug(self, fmt: str, *args: Any, err: Optional[BaseException] = None) -> None:
        self.log_with_error(Level.DEBUG, fmt, err, *args)

    def debug_with_error(
        self, fmt: str, err: Optional[BaseException], *args: Any
    ) -> None:
        self.log_with_error(Level.DEBUG, fmt, err, *args)

    def info(self, fmt: str, *args: Any) -> None:
        self._emit(Level.INFO, fmt, args)

    def warn(self, fmt: str, *args: Any, err: Optional[BaseException] = None) -> None:
        self.log_with_error(Level.WARN, fmt, err, *args)

    warning = warn

    def error(self, fmt: str, *args: Any, err: Optional[BaseException] = None) -> None:
        self.log_with_error(Level.ERROR, fmt, err, *args)

    def fatal(self, fmt: str, *args: Any, err: Optional[BaseException] = None) -> None:
        """
        Emit at fatal level, then end the process with ``FATAL_EXIT_CODE``.

        The default exit function uses ``os._exit`` so the process ends even
        when called from a worker thread or under ``except BaseException``.
        """
        self.log_with_error(Level.FATAL, fmt, err, *args)
        self._exit(FATAL_EXIT_CODE)

    def panic(self, fmt: str, *args: Any, err: Optional[BaseException] = None) -> None:
        """Emit at panic level, then raise ``LoggerPanic`` with the message."""
        fmt, args = self._with_error(fmt, err, args)
        refined = self._emit(Level.PANIC, fmt, args, err)
        message = _format_message(fmt, refined if refined is not None else ())
        raise LoggerPanic(message, module=self._module) from err

    def log(self, level: LevelLike, fmt: str, *args: Any) -> None:
        self._emit(self._coerce(level), fmt, args)

    def log_with_error(
        self,
        level: LevelLike,
        fmt: str,
        err: Optional[BaseException],
        *args: Any,
    ) -> None:
        """Log ``fmt % args`` followed by the rendered ``err`` when it is set."""
        fmt, args = self._with_error(fmt, err, args)
        self._emit(self._coerce(level), fmt, args, err)

    @staticmethod
    def _coerce(level: LevelLike) -> Level:
        parsed = try_parse_level(level)
        if parsed is None:
            raise ValueError(f"unknown log level: {level!r}")
        return parsed

    @staticmethod
    def _with_error(
        fmt: str, err: Optional[BaseException], args: Tuple[Any, ...]
    ) -> Tuple[str, Tuple[Any, ...]]:
        if err is None:
            return fmt, args
        if not args:
            # a plain message is not a format until the error is appended
            fmt = fmt.replace("%", "%%")
        return fmt + ": %s", (*args, as_error(err))

    def _emit(
        self,
        level: Level,
        fmt: str,
        args: Tuple[Any, ...],
        err: Optional[BaseException] = None,
    ) -> Optional[Tuple[Any, ...]]:
        if level < self._level:
            return None
        refined = tuple(self._refine(arg) for arg in args)
        fields: dict[str, Any] = {"level": level.label}
        if err is not None and self._stack_traces and err.__traceback__ is not None:
            fields["exc_info"] = err
        write = getattr(self._engine, level.method_name)
        try:
            write(fmt, *refined, **fields)
        except (TypeError, ValueError):
            # placeholders don't match the arguments
            write(f"{fmt} {INVALID}", args=[str(arg) for arg in refined], **fields)
        return refined

    def _refine(self, arg: Any) -> Any:
        if isinstance(arg, Deferred):
            try:
                return arg()
            except Exception:
                return INVALID
        formatter = self._formatter_for(type(arg))
        if formatter is None:
            return arg
        try:
            return formatter(arg, "")
        except Exception:
            return INVALID

    def _formatter_for(self, key: type) -> Optional[Formatter]:
        for lookup in self._lookups:
            formatter, found = lookup(key)
            if found:
                return formatter
        return None


__all__ = ["ExitFunc", "FATAL_EXIT_CODE", "FormatterLookup", "Logger", "exit_process"]
