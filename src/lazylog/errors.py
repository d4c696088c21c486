"""
Exceptions raised by lazylog and the structured-error capability.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


class LazylogError(Exception):
    """Base class for lazylog exceptions."""


class RegistryNotInitializedError(LazylogError, RuntimeError):
    """A formatter was registered before ``lazylog.initialize`` ran."""

    def __init__(self) -> None:
        super().__init__(
            "formatter registry is not initialized; call lazylog.initialize() first"
        )


class LoggerPanic(LazylogError):
    """Raised by ``Logger.panic`` after the line has been emitted."""

    def __init__(self, message: str, module: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.module = module


@runtime_checkable
class StructuredError(Protocol):
    """Errors carrying a structured payload rendered next to their message."""

    def to_dict(self) -> Mapping[str, Any]:
        ...


__all__ = [
    "LazylogError",
    "LoggerPanic",
    "RegistryNotInitializedError",
    "StructuredError",
]
