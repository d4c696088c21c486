"""
Logger lookup and process-wide configuration.

``LoggingRuntime`` owns a configuration slot and the formatter registry and
builds loggers from them. The module-level functions operate on a
process-default runtime; applications that prefer explicit wiring can create
their own ``LoggingRuntime`` and pass it around instead.
"""

from __future__ import annotations

import functools
import inspect
import threading
import types
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

from .config import LoggingConfig
from .engine import build_engine, configure_structlog
from .errors import RegistryNotInitializedError
from .formatters import Formatter
from .levels import Level
from .logger import FormatterLookup, Logger, exit_process
from .registry import FormatterRegistry
from .settings import load_settings


def qualified_name(identity: Any) -> str:
    """Dotted module path of a module, class, function, instance or string."""
    if isinstance(identity, str):
        return identity
    if isinstance(identity, types.ModuleType):
        return identity.__name__
    if isinstance(identity, type) or inspect.isroutine(identity):
        return identity.__module__
    return type(identity).__module__


class LoggingRuntime:
    """Configuration slot plus formatter registry that loggers are built from."""

    def __init__(
        self,
        config: Optional[LoggingConfig] = None,
        registry: Optional[FormatterRegistry] = None,
    ) -> None:
        self._lock = threading.Lock()
        self._config = config or LoggingConfig()
        self._registry = registry

    @property
    def config(self) -> LoggingConfig:
        with self._lock:
            return self._config

    @property
    def registry(self) -> Optional[FormatterRegistry]:
        with self._lock:
            return self._registry

    @property
    def initialized(self) -> bool:
        return self.registry is not None

    def configure(self, config: LoggingConfig) -> None:
        """Replace the configuration used by loggers created from now on."""
        with self._lock:
            self._config = config

    def initialize(self, config: Optional[LoggingConfig] = None) -> None:
        """
        Install ``config`` and make the formatter registry available.

        Safe to call again: the configuration is replaced and the formatters
        it declares are registered on top of the existing registry.
        """
        config = config or LoggingConfig()
        with self._lock:
            self._config = config
            if self._registry is None:
                self._registry = FormatterRegistry()
            registry = self._registry
        for key, formatter in config.formatters.items():
            registry.register(key, formatter)
        configure_structlog(config)

    def set_formatter(self, key: type, formatter: Formatter) -> None:
        registry = self.registry
        if registry is None:
            raise RegistryNotInitializedError()
        registry.register(key, formatter)

    def get_formatter(self, key: type) -> Tuple[Optional[Formatter], bool]:
        registry = self.registry
        if registry is None:
            return None, False
        return registry.resolve(key)

    def get_logger(self, module: str) -> Logger:
        """
        Logger for ``module``.

        Unconfigured modules get a logger at the default level whose output is
        discarded.
        """
        config = self.config
        module_config = config.resolve(module)
        if module_config is None:
            return self._build(config, module, config.level, discard=True)
        return self._build(
            config, module, module_config.level, overrides=module_config.formatters
        )

    def get_root(self) -> Logger:
        config = self.config
        return self._build(config, "", config.level)

    def get_logger_by_package(self, identity: Any) -> Logger:
        """Logger named after the module ``identity`` lives in, minus the root package."""
        config = self.config
        module = config.module_name(qualified_name(identity))
        if not module:
            return self.get_root()
        return self.get_logger(module)

    def _build(
        self,
        config: LoggingConfig,
        module: str,
        level: Level,
        *,
        discard: bool = False,
        overrides: Optional[Mapping[type, Formatter]] = None,
    ) -> Logger:
        engine = build_engine(
            level,
            config.output(),
            module=module,
            json_output=config.json_output,
            discard=discard,
        )
        lookups: List[FormatterLookup] = []
        if overrides:
            local = FormatterRegistry(seed=False)
            for key, formatter in overrides.items():
                local.register(key, formatter)
            lookups.append(local.resolve)
        lookups.append(self.get_formatter)
        return Logger(
            engine,
            level,
            module=module,
            lookups=lookups,
            stack_traces=config.stack_traces,
            exit_func=config.exit_func
            or functools.partial(exit_process, sink=config.output()),
        )


_default_runtime = LoggingRuntime()


def default_runtime() -> LoggingRuntime:
    return _default_runtime


def initialize(config: Optional[LoggingConfig] = None) -> None:
    _default_runtime.initialize(config)


def initialize_from_settings(path: Optional[Path] = None) -> LoggingConfig:
    """Load settings from TOML/environment and initialize with them."""
    config = load_settings(path).to_config()
    _default_runtime.initialize(config)
    return config


def configure(config: LoggingConfig) -> None:
    _default_runtime.configure(config)


def get_logger(module: str) -> Logger:
    return _default_runtime.get_logger(module)


def get_root() -> Logger:
    return _default_runtime.get_root()


def get_logger_by_package(identity: Any) -> Logger:
    return _default_runtime.get_logger_by_package(identity)


def set_formatter(key: type, formatter: Formatter) -> None:
    """Register ``formatter`` for ``key``; requires ``initialize()`` first."""
    _default_runtime.set_formatter(key, formatter)


def get_formatter(key: type) -> Tuple[Optional[Formatter], bool]:
    return _default_runtime.get_formatter(key)


__all__ = [
    "LoggingRuntime",
    "configure",
    "default_runtime",
    "get_formatter",
    "get_logger",
    "get_logger_by_package",
    "get_root",
    "initialize",
    "initialize_from_settings",
    "qualified_name",
    "set_formatter",
]
