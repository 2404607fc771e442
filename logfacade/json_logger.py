# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Line-delimited JSON logger backed by stdlib logging."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from .config import DEFAULT_NAME, DEFAULT_PROG, LEVELS, level_name, parse_level
from .fields import resolve_clashes, safe_str
from .logger import Logger, report_failure

ENGINE_NAME = "logfacade.json"

# Keys written by JSONFormatter itself; clashing fields become "fields.<key>"
RESERVED_KEYS = ("time", "level", "msg", "prog", "name", "error")

_LEVEL_SETTINGS = {levelno: name for name, levelno in LEVELS.items()}


class JSONFormatter(logging.Formatter):
    """Formatter that renders each record as one self-contained JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": level_name(record.levelno),
            "msg": record.getMessage(),
        }

        prog = getattr(record, "prog", None)
        if prog:
            log_entry["prog"] = prog
        context = getattr(record, "context", None)
        if context:
            log_entry["name"] = context

        fields = getattr(record, "fields", None)
        if fields:
            log_entry.update(resolve_clashes(fields, RESERVED_KEYS))

        if record.exc_info:
            log_entry["error"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=safe_str)


class _SinkHandler(logging.StreamHandler):
    """StreamHandler that drops records while no stream is set."""

    def emit(self, record: logging.LogRecord) -> None:
        if self.stream is None:
            return
        super().emit(record)


def _shared_engine() -> tuple[logging.Logger, _SinkHandler]:
    """Return the process-wide JSON engine, creating its handler on first use."""
    engine = logging.getLogger(ENGINE_NAME)
    for handler in engine.handlers:
        if isinstance(handler, _SinkHandler):
            return engine, handler

    handler = _SinkHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    engine.addHandler(handler)
    engine.setLevel(logging.INFO)
    # Never hand records to root handlers (e.g. a structured stdlib redirect)
    engine.propagate = False
    return engine, handler


class JSONLogger(Logger):
    """Logger that writes line-delimited JSON through a shared stdlib logger.

    All instances in a process drive the same stdlib logger
    (``logging.getLogger("logfacade.json")``), so level and output changes are
    shared. ``prog`` and ``name`` are per instance and added to each record.
    """

    def __init__(
        self,
        prog: str = "",
        name: str = "",
        level: Optional[str] = None,
        exit_func: Optional[Callable[[int], Any]] = None,
    ):
        """Initialize JSON logger.

        Args:
            prog: Program name (default "APP")
            name: Context/subsystem name (default "cli")
            level: Optional initial level (debug, info, warn, error, fatal)
            exit_func: Called with status 1 after fatal records; defaults to os._exit

        Raises:
            ValueError: If level is not a valid level name
        """
        self.prog = prog or DEFAULT_PROG
        self.name = name or DEFAULT_NAME
        self.exit_func = exit_func
        self._engine, self._handler = _shared_engine()
        if level:
            self._engine.setLevel(parse_level(level))

    @classmethod
    def create(
        cls,
        prog: str = "",
        name: str = "",
        existing: Optional[Logger] = None,
    ) -> Logger:
        """Create a JSON logger, or relabel an existing one.

        When ``existing`` is given no new logger is built: its name and prog
        are updated and the same instance is returned.

        Args:
            prog: Program name (default "APP")
            name: Context/subsystem name (default "cli")
            existing: Logger to reuse

        Returns:
            Logger instance
        """
        prog = prog or DEFAULT_PROG
        name = name or DEFAULT_NAME
        if existing is not None:
            existing.set_name(name)
            existing.set_prog(prog)
            return existing
        return cls(prog=prog, name=name)

    def _log(self, level: int, message: str, fields: Optional[dict[str, Any]] = None) -> None:
        extra: dict[str, Any] = {"prog": self.prog, "context": self.name}
        if fields:
            extra["fields"] = fields
        self._engine.log(level, message, extra=extra)

    def _write(self, text: str) -> None:
        handler = self._handler
        with handler.lock:
            stream = handler.stream
            if stream is None:
                return
            try:
                stream.write(text)
                handler.flush()
            except Exception as e:
                report_failure(e)

    def flush(self) -> None:
        try:
            self._handler.flush()
        except Exception as e:
            report_failure(e)

    def set_level(self, level: str) -> None:
        levelno = LEVELS.get(level.lower())
        if levelno is not None:
            self._engine.setLevel(levelno)

    @property
    def level(self) -> str:
        levelno = self._engine.getEffectiveLevel()
        return _LEVEL_SETTINGS.get(levelno, level_name(levelno))

    def set_name(self, name: str) -> None:
        self.name = name

    def set_prog(self, prog: str) -> None:
        self.prog = prog

    def get_output(self) -> Optional[Any]:
        return self._handler.stream

    def set_output(self, sink: Optional[Any]) -> None:
        self._handler.setStream(sink)

    def stdlib_logger(self) -> Optional[logging.Logger]:
        return self._engine

    def structlog_logger(self) -> Optional[Any]:
        return None
