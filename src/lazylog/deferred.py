"""
Deferred values: arguments formatted only when a log line is emitted.

Wrap anything expensive to render in a ``Deferred`` and pass it as a regular
format argument::

    log.debug("payload %s", as_json(payload))

The logger materializes the string only if the call passes level filtering.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from .formatters import INVALID, dump_json, format_iso_time, render_error


class Deferred:
    """A nullary callable producing a string on demand."""

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[], str]) -> None:
        if not callable(func):
            raise TypeError(f"Deferred expects a callable, got {type(func).__name__}")
        self._func = func

    def __call__(self) -> str:
        return self._func()

    def __str__(self) -> str:
        return self._func()

    def __repr__(self) -> str:
        name = getattr(self._func, "__qualname__", type(self._func).__name__)
        return f"Deferred({name})"


def defer(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Deferred:
    """Wrap ``func(*args, **kwargs)``; the result is converted with ``str``."""

    def _produce() -> str:
        return str(func(*args, **kwargs))

    _produce.__qualname__ = getattr(func, "__qualname__", "defer")
    return Deferred(_produce)


def as_json(value: Any) -> Deferred:
    """Indented, key-sorted JSON of ``value``; ``""`` for ``None``."""

    def _produce() -> str:
        if value is None:
            return ""
        try:
            return dump_json(value, indent=2)
        except (TypeError, ValueError, RecursionError):
            return INVALID

    return Deferred(_produce)


def as_iso_time(value: Optional[datetime] = None) -> Deferred:
    """
    RFC 3339 rendering of ``value``.

    Without an argument the current UTC time is captured now, not when the
    line is written.
    """
    moment = value if value is not None else datetime.now(timezone.utc)
    return Deferred(lambda: format_iso_time(moment))


def as_error(err: Optional[BaseException]) -> Deferred:
    """Message of ``err`` followed by its structured payload when it has one."""
    return Deferred(lambda: render_error(err))


def last(value: Optional[str], length: int) -> Deferred:
    """Keep only the last ``length`` characters of ``value``."""

    def _produce() -> str:
        if not value or length <= 0:
            return ""
        return value[-length:]

    return Deferred(_produce)


__all__ = ["Deferred", "as_error", "as_iso_time", "as_json", "defer", "last"]
