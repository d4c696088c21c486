"""
Built-in value formatters and the capabilities they dispatch on.

A formatter maps ``(value, hint)`` to a string and never raises: failures are
reported in-line with the ``INVALID`` marker so that a log call cannot break
the code that issued it.
"""

from __future__ import annotations

import dataclasses
import json
from datetime import date, datetime, timedelta
from pathlib import PurePath
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from pydantic import BaseModel

from .errors import StructuredError

INVALID = "!invalid"

Formatter = Callable[[Any, str], str]

_PRETTY_HINTS = frozenset({"indent", "pretty"})
_JSON_ERRORS = (TypeError, ValueError, RecursionError)


@runtime_checkable
class TimeLike(Protocol):
    """Anything exposing ``isoformat()`` (dates, times, arrow/pendulum objects)."""

    def isoformat(self) -> str:
        ...


@runtime_checkable
class Stringify(Protocol):
    """Objects that know how to render themselves for a log line."""

    def to_log_string(self, hint: str) -> str:
        ...


def _json_default(value: Any) -> Any:
    from .deferred import Deferred

    if isinstance(value, Deferred):
        try:
            return value()
        except Exception:
            return INVALID
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, datetime):
        return format_iso_time(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, StructuredError):
        return dict(value.to_dict())
    if isinstance(value, BaseException):
        return _error_message(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dump_json(value: Any, indent: Optional[int] = None) -> str:
    """Serialize ``value`` with sorted keys; raises on unsupported values."""
    separators = None if indent is not None else (",", ":")
    return json.dumps(
        value,
        default=_json_default,
        sort_keys=True,
        indent=indent,
        separators=separators,
        allow_nan=False,
        ensure_ascii=False,
    )


def format_iso_time(value: datetime) -> str:
    """
    Render ``value`` as RFC 3339 with second precision.

    Naive datetimes are interpreted as local time; UTC is written as ``Z``.
    """
    if value.tzinfo is None or value.utcoffset() is None:
        value = value.astimezone()
    text = value.isoformat(timespec="seconds")
    if value.utcoffset() == timedelta(0):
        text = text[:-6] + "Z"
    return text


def to_iso_time(value: Any, hint: str = "") -> str:
    """Format a time-like value; ``hint`` is an optional ``strftime`` pattern."""
    if value is None:
        return ""
    try:
        if isinstance(value, datetime):
            if hint:
                if value.tzinfo is None:
                    value = value.astimezone()
                return value.strftime(hint)
            return format_iso_time(value)
        if isinstance(value, date):
            return value.strftime(hint) if hint else value.isoformat()
        if isinstance(value, TimeLike):
            return str(value.isoformat())
    except (ValueError, OverflowError):
        return INVALID
    return INVALID


def to_json(value: Any, hint: str = "") -> str:
    """Compact JSON, or indented when ``hint`` is ``"indent"``/``"pretty"``."""
    if value is None:
        return ""
    indent = 2 if hint in _PRETTY_HINTS else None
    try:
        return dump_json(value, indent=indent)
    except _JSON_ERRORS:
        return INVALID


def _error_message(err: BaseException) -> str:
    return str(err) or type(err).__name__


def render_error(err: Optional[BaseException]) -> str:
    """
    Render an exception for a log line.

    Errors exposing a structured payload (``to_dict()``) are rendered as
    ``"<message>: <json payload>"``; others as their plain message.
    """
    if err is None:
        return ""
    message = _error_message(err)
    if not isinstance(err, StructuredError):
        return message
    try:
        payload = dump_json(dict(err.to_dict()))
    except Exception:
        return message
    return f"{message}: {payload}"


def to_error_string(value: Any, hint: str = "") -> str:
    if value is None:
        return ""
    if not isinstance(value, BaseException):
        return INVALID
    return render_error(value)


def stringify(value: Any, hint: str = "") -> str:
    if value is None:
        return ""
    try:
        return str(value.to_log_string(hint))
    except Exception:
        return INVALID


__all__ = [
    "Formatter",
    "INVALID",
    "Stringify",
    "TimeLike",
    "dump_json",
    "format_iso_time",
    "render_error",
    "stringify",
    "to_error_string",
    "to_iso_time",
    "to_json",
]
