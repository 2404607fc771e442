# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Factory functions and the ambient logger registry."""

import os
import threading
from typing import Callable, Optional

from .config import DEFAULT_NAME, DEFAULT_PROG, StructuredConfig
from .json_logger import JSONLogger
from .logger import Logger
from .structured_logger import StructuredLogger


def _default(value: str | None, env_var: str, fallback: str) -> str:
    """Helper to pick an explicit value, then env var, then fallback."""
    return (value or os.getenv(env_var) or fallback)


def create_logger(
    logger_type: str | None = None,
    level: str | None = None,
    name: str | None = None,
    prog: str | None = None,
    encoding: str | None = None,
) -> Logger:
    """Factory function to create a logger instance.

    Args:
        logger_type: Type of logger to create. Options: "json", "structured".
            Defaults to LOG_TYPE env or "json".
        level: Logging level (debug, info, warn, error, fatal).
            Defaults to LOG_LEVEL env or "info".
        name: Context name for JSON loggers. Defaults to LOG_NAME env or "cli".
        prog: Program name for JSON loggers. Defaults to LOG_PROG env or "APP".
        encoding: Output encoding for structured loggers ("json" or "console").
            Defaults to LOG_ENCODING env or "json".

    Returns:
        Logger instance

    Raises:
        ValueError: If logger_type, level or encoding is not recognized

    Example:
        >>> logger = create_logger(logger_type="json", name="worker", prog="ingest")
        >>> logger.infow("started", "pid", 42)
        >>>
        >>> # Replaces the global structlog configuration
        >>> logger = create_logger(logger_type="structured", encoding="console")
    """
    logger_type = _default(logger_type, "LOG_TYPE", "json").lower()

    if logger_type == "json":
        return JSONLogger(
            prog=_default(prog, "LOG_PROG", DEFAULT_PROG),
            name=_default(name, "LOG_NAME", DEFAULT_NAME),
            level=_default(level, "LOG_LEVEL", "info"),
        )
    elif logger_type == "structured":
        return StructuredLogger(StructuredConfig.from_env(level=level, encoding=encoding))
    else:
        raise ValueError(
            f"Unknown logger_type: {logger_type}. "
            f"Must be one of: json, structured"
        )


class LoggerRegistry:
    """Holds the single ambient logger of an application.

    The logger is created lazily by ``factory`` on first use and lives as
    long as the registry. Pass the registry to components that need ambient
    logging instead of reaching for module globals.

    Example:
        >>> registry = LoggerRegistry()
        >>> a = registry.get_or_create("api", "server")
        >>> b = registry.get_or_create("worker", "server")
        >>> a is b and b.name == "worker"
        True
    """

    def __init__(self, factory: Optional[Callable[[str, str], Logger]] = None):
        """Initialize registry.

        Args:
            factory: Builds the logger from (name, prog); defaults to a JSONLogger
        """
        self._factory = factory or (lambda name, prog: JSONLogger(prog=prog, name=name))
        self._logger: Optional[Logger] = None
        self._lock = threading.Lock()

    def get_or_create(self, name: str = "", prog: str = "") -> Logger:
        """Return the registry's logger, creating it on first call.

        Later calls reuse the same instance and only update its name and
        prog (empty values fall back to "cli" and "APP").
        """
        with self._lock:
            if self._logger is None:
                self._logger = self._factory(name or DEFAULT_NAME, prog or DEFAULT_PROG)
                return self._logger
            return JSONLogger.create(prog=prog, name=name, existing=self._logger)

    def get(self) -> Logger:
        """Return the registry's logger without relabeling it, creating it if needed."""
        with self._lock:
            if self._logger is None:
                self._logger = self._factory(DEFAULT_NAME, DEFAULT_PROG)
            return self._logger

    def set(self, logger: Logger) -> None:
        """Replace the registry's logger."""
        with self._lock:
            self._logger = logger


_default_registry = LoggerRegistry()


def default_registry() -> LoggerRegistry:
    """Return the process-wide default registry."""
    return _default_registry


def get_logger(name: str | None = None) -> Logger:
    """Return the process-wide default logger.

    The name is accepted for call-site symmetry with ``logging.getLogger``;
    every name returns the same default instance.
    """
    return _default_registry.get()


def set_default_logger(logger: Logger) -> None:
    """Set the process-wide default logger returned by :func:`get_logger`."""
    _default_registry.set(logger)
