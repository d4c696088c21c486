"""
Logging settings loaded from a TOML file and ``LAZYLOG_`` environment variables.

Example ``lazylog.toml``::

    [logging]
    level = "info"
    package = "myapp"
    json_output = false

    [modules]
    "db" = "debug"
    "http.client" = "warn"
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    import tomli as tomllib  # type: ignore[no-redef]

from pydantic_settings import BaseSettings, SettingsConfigDict

from .config import LoggingConfig
from .levels import DEFAULT_LEVEL


class LoggingSettings(BaseSettings):
    """Logging options loaded from env or TOML files."""

    model_config = SettingsConfigDict(
        env_prefix="LAZYLOG_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    level: str = DEFAULT_LEVEL.label
    package: str = ""
    json_output: bool = False
    stack_traces: bool = True
    hierarchical: bool = False
    modules: Dict[str, str] = {}

    def to_config(self, **overrides: Any) -> LoggingConfig:
        """Build the runtime configuration; ``overrides`` win over settings."""
        values: Dict[str, Any] = {
            "level": self.level,
            "package": self.package,
            "json_output": self.json_output,
            "stack_traces": self.stack_traces,
            "hierarchical": self.hierarchical,
            "modules": dict(self.modules),
        }
        values.update(overrides)
        return LoggingConfig(**values)


_CONFIG_ENV_VAR = "LAZYLOG_CONFIG_PATH"
_DEFAULT_CONFIG_FILE = Path("lazylog.toml")
_LOGGING_KEYS = ("level", "package", "json_output", "stack_traces", "hierarchical")


def _load_toml_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from the first TOML file found on disk."""
    candidates: List[Path] = []
    if path is not None:
        candidates.append(Path(path))
    config_override = os.getenv(_CONFIG_ENV_VAR)
    if config_override:
        candidates.append(Path(config_override))
    candidates.append(_DEFAULT_CONFIG_FILE)

    for candidate in candidates:
        if candidate.is_file():
            with candidate.open("rb") as handle:
                return tomllib.load(handle)
    return {}


def _flatten_config(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Translate the TOML tables into LoggingSettings keyword arguments."""
    data: Dict[str, Any] = {}

    section = raw.get("logging", {})
    for key in _LOGGING_KEYS:
        if key in section:
            data[key] = section[key]

    modules = raw.get("modules", {})
    if modules:
        data["modules"] = {
            name: entry.get("level", DEFAULT_LEVEL.label)
            if isinstance(entry, dict)
            else str(entry)
            for name, entry in modules.items()
        }
    return data


def load_settings(path: Optional[Path] = None) -> LoggingSettings:
    raw = _load_toml_config(path)
    return LoggingSettings(**_flatten_config(raw))


__all__ = ["LoggingSettings", "load_settings"]
