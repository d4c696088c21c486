"""
Type-keyed registry of value formatters shared by every logger.
"""

from __future__ import annotations

import threading
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel

from .formatters import (
    Formatter,
    Stringify,
    TimeLike,
    stringify,
    to_error_string,
    to_iso_time,
    to_json,
)


def default_formatters() -> Dict[type, Formatter]:
    """Formatters every fresh registry starts with."""
    return {
        datetime: to_iso_time,
        date: to_iso_time,
        Stringify: stringify,
        TimeLike: to_iso_time,
        BaseException: to_error_string,
        BaseModel: to_json,
        dict: to_json,
        list: to_json,
        tuple: to_json,
        set: to_json,
        frozenset: to_json,
    }


class FormatterRegistry:
    """
    Thread-safe mapping from value types to formatters.

    Lookup tries the exact type, then its MRO, then every registered key via
    ``issubclass`` so runtime-checkable protocols and ABCs match structurally.
    The last registration for a key wins.
    """

    def __init__(self, seed: bool = True) -> None:
        self._lock = threading.Lock()
        self._formatters: Dict[type, Formatter] = {}
        self._cache: Dict[type, Optional[Formatter]] = {}
        if seed:
            self._formatters.update(default_formatters())

    def register(self, key: type, formatter: Formatter) -> None:
        if not isinstance(key, type):
            raise TypeError(f"formatter key must be a type, got {key!r}")
        if not callable(formatter):
            raise TypeError(f"formatter for {key.__name__} is not callable")
        with self._lock:
            self._formatters[key] = formatter
            self._cache.clear()

    def resolve(self, key: type) -> Tuple[Optional[Formatter], bool]:
        """Return ``(formatter, True)`` for ``key`` or ``(None, False)``."""
        with self._lock:
            if key in self._cache:
                formatter = self._cache[key]
            else:
                formatter = self._lookup(key)
                self._cache[key] = formatter
        return formatter, formatter is not None

    def _lookup(self, key: type) -> Optional[Formatter]:
        for base in getattr(key, "__mro__", (key,)):
            formatter = self._formatters.get(base)
            if formatter is not None:
                return formatter
        for candidate, formatter in self._formatters.items():
            try:
                if issubclass(key, candidate):
                    return formatter
            except TypeError:
                # protocols with data members refuse issubclass()
                continue
        return None

    def format(self, value: Any, hint: str = "") -> Optional[str]:
        """Format ``value`` with its registered formatter, ``None`` if none applies."""
        formatter, found = self.resolve(type(value))
        if not found or formatter is None:
            return None
        return formatter(value, hint)

    def snapshot(self) -> Dict[type, Formatter]:
        with self._lock:
            return dict(self._formatters)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._formatters

    def __len__(self) -> int:
        with self._lock:
            return len(self._formatters)


__all__ = ["FormatterRegistry", "default_formatters"]
