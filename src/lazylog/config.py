"""
Logger configuration records.

``LoggingConfig`` is the process-wide configuration; ``ModuleConfig`` holds the
overrides of a single module. Both are immutable once built.
"""

from __future__ import annotations

import sys
from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .formatters import Formatter
from .levels import DEFAULT_LEVEL, Level, parse_level


class ModuleConfig(BaseModel):
    """Level and formatter overrides of one module."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    level: Level = DEFAULT_LEVEL
    formatters: Dict[Type[Any], Formatter] = Field(default_factory=dict)

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> Level:
        return parse_level(value)


class LoggingConfig(BaseModel):
    """Process-wide logging configuration."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    level: Level = DEFAULT_LEVEL
    package: str = ""
    modules: Dict[str, ModuleConfig] = Field(default_factory=dict)
    formatters: Dict[Type[Any], Formatter] = Field(default_factory=dict)
    sink: Optional[Any] = None
    json_output: bool = False
    stack_traces: bool = True
    hierarchical: bool = False
    exit_func: Optional[Callable[[int], None]] = None

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> Level:
        return parse_level(value)

    @field_validator("modules", mode="before")
    @classmethod
    def _expand_modules(cls, value: Any) -> Any:
        # Allow the short form {"module": "debug"}.
        if not isinstance(value, dict):
            return value
        return {
            name: {"level": entry} if isinstance(entry, (str, int)) else entry
            for name, entry in value.items()
        }

    def resolve(self, module: str) -> Optional[ModuleConfig]:
        """
        Return the configuration of ``module`` or ``None`` when it has none.

        With ``hierarchical`` enabled, the closest dotted parent that is
        configured applies to its children.
        """
        found = self.modules.get(module)
        if found is not None or not self.hierarchical:
            return found
        name = module
        while "." in name:
            name = name.rsplit(".", 1)[0]
            found = self.modules.get(name)
            if found is not None:
                return found
        return None

    def module_name(self, qualified: str) -> str:
        """
        Strip the configured root ``package`` prefix from a dotted path.

        The root package itself maps to ``""``, the root logger.
        """
        prefix = self.package.rstrip(".")
        if prefix and qualified == prefix:
            return ""
        if prefix and qualified.startswith(prefix + "."):
            return qualified[len(prefix) + 1 :]
        return qualified

    def output(self) -> Any:
        """The configured sink, standard error when none is set."""
        return self.sink if self.sink is not None else sys.stderr


__all__ = ["LoggingConfig", "ModuleConfig"]
