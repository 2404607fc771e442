# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Structured logger backed by structlog.

Constructing a :class:`StructuredLogger` has process-wide effects: it
replaces the global structlog configuration, so ``structlog.get_logger()``
writes through the new logger's output, and it redirects stdlib logging
on the root logger into the new logger.
"""

import logging
from typing import Any, Callable, Optional

import structlog

from .config import LEVELS, StructuredConfig, level_name
from .fields import resolve_clashes
from .logger import Logger, report_failure
from .proxy import OutputProxy
from .sanitize import strip_control_sequences

# Keys written by the processor chain, plus "self" which the bound
# logger's log() takes positionally; clashing fields become "fields.<key>"
RESERVED_KEYS = ("event", "level", "timestamp", "exception", "self")

_STANDARD_LEVELS = (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL)

_LEVEL_SETTINGS = {levelno: name for name, levelno in LEVELS.items()}


class StaticFields:
    """Processor that prepends a fixed set of fields to every event."""

    def __init__(self, fields: dict[str, Any]):
        self._fields = dict(fields)

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        if not self._fields:
            return event_dict
        return {**self._fields, **event_dict}


def build_processors(config: StructuredConfig) -> list[Any]:
    """Build the processor chain for a config, ending in the chosen renderer."""
    renderer: Any
    if config.renderer_name == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    return [
        StaticFields(config.sorted_initial_fields()),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        renderer,
    ]


def _nearest_level(levelno: int) -> int:
    """Map arbitrary stdlib level numbers onto the standard ones structlog knows."""
    candidates = [level for level in _STANDARD_LEVELS if level <= levelno]
    return candidates[-1] if candidates else logging.DEBUG


class StdlibRedirectHandler(logging.Handler):
    """Handler that forwards stdlib logging records into a structlog logger."""

    def __init__(self, target: Any):
        super().__init__()
        self._target = target

    def emit(self, record: logging.LogRecord) -> None:
        try:
            kwargs: dict[str, Any] = {"logger": record.name}
            if record.exc_info:
                kwargs["exc_info"] = record.exc_info
            self._target.log(_nearest_level(record.levelno), record.getMessage(), **kwargs)
        except Exception:
            self.handleError(record)


class StructuredLogger(Logger):
    """Logger that emits structlog records through a swappable output.

    structlog's ``WriteLogger`` binds its file when it is built, so the
    logger is built against an :class:`OutputProxy` and :meth:`set_output`
    swaps the proxy's sink instead. Until a sink is set, output is discarded.

    Every string argument is stripped of terminal control sequences before
    it reaches the engine.

    The engine has no notion of program/context names and its level is
    fixed by the config, so :meth:`set_name`, :meth:`set_prog` and
    :meth:`set_level` are accepted and ignored.

    Example:
        >>> import io
        >>> logger = StructuredLogger(StructuredConfig(level="debug", encoding="json"))
        >>> buf = io.StringIO()
        >>> logger.set_output(buf)
        >>> logger.infow("request", "method", "GET", "path")
    """

    def __init__(
        self,
        config: Optional[StructuredConfig] = None,
        output: Optional[Any] = None,
        exit_func: Optional[Callable[[int], Any]] = None,
    ):
        """Initialize structured logger and install it process-wide.

        Args:
            config: Level, encoding and static fields (defaults: info, json, none)
            output: Optional initial sink
            exit_func: Called with status 1 after fatal records; defaults to os._exit

        Raises:
            ValueError: If the config has an invalid level or encoding
        """
        self.config = config or StructuredConfig()
        self.name = ""
        self.prog = ""
        self.exit_func = exit_func
        self._proxy = OutputProxy(output)

        processors = build_processors(self.config)
        wrapper_class = structlog.make_filtering_bound_logger(self.config.min_level)
        self._logger = structlog.wrap_logger(
            structlog.WriteLogger(self._proxy),
            processors=processors,
            wrapper_class=wrapper_class,
            context_class=dict,
            cache_logger_on_first_use=False,
        ).bind()

        self._install_globals(processors, wrapper_class)

    def _install_globals(self, processors: list[Any], wrapper_class: Any) -> None:
        """Replace the global structlog config and redirect stdlib logging here."""
        structlog.configure(
            processors=processors,
            wrapper_class=wrapper_class,
            context_class=dict,
            logger_factory=structlog.WriteLoggerFactory(file=self._proxy),
            cache_logger_on_first_use=False,
        )

        root = logging.getLogger()
        for handler in list(root.handlers):
            root.removeHandler(handler)
        root.addHandler(StdlibRedirectHandler(self._logger))
        root.setLevel(self.config.min_level)

    def _sanitize(self, args: tuple[Any, ...]) -> tuple[Any, ...]:
        return tuple(strip_control_sequences(arg) if isinstance(arg, str) else arg for arg in args)

    def _sanitize_text(self, text: str) -> str:
        return strip_control_sequences(text)

    def _log(self, level: int, message: str, fields: Optional[dict[str, Any]] = None) -> None:
        try:
            self._logger.log(level, message, **resolve_clashes(fields or {}, RESERVED_KEYS))
        except Exception as e:
            report_failure(e)

    def _write(self, text: str) -> None:
        try:
            self._proxy.write(text)
            self._proxy.flush()
        except Exception as e:
            report_failure(e)

    def flush(self) -> None:
        try:
            self._proxy.flush()
        except Exception as e:
            report_failure(e)

    def set_level(self, level: str) -> None:
        """No-op: the minimum level is fixed by the config."""

    @property
    def level(self) -> str:
        levelno = self.config.min_level
        return _LEVEL_SETTINGS.get(levelno, level_name(levelno))

    def set_name(self, name: str) -> None:
        """No-op: structlog records carry no context name."""

    def set_prog(self, prog: str) -> None:
        """No-op: structlog records carry no program name."""

    def get_output(self) -> Optional[Any]:
        return self._proxy.get_sink()

    def set_output(self, sink: Optional[Any]) -> None:
        self._proxy.set_sink(sink)

    def stdlib_logger(self) -> Optional[logging.Logger]:
        return None

    def structlog_logger(self) -> Optional[Any]:
        return self._logger
