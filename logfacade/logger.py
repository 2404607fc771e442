# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Abstract logger interface."""

import logging
import os
import sys
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Callable, Optional

from .fields import pair_fields, safe_str


def sprint(args: tuple[Any, ...]) -> str:
    """Concatenate operands, adding a space between two operands when neither is a string."""
    parts: list[str] = []
    for i, arg in enumerate(args):
        if i > 0 and not isinstance(arg, str) and not isinstance(args[i - 1], str):
            parts.append(" ")
        parts.append(safe_str(arg))
    return "".join(parts)


def sprintln(args: tuple[Any, ...]) -> str:
    """Join operands with single spaces, without the trailing newline."""
    return " ".join(safe_str(arg) for arg in args)


def sprintf(format: str, args: tuple[Any, ...]) -> str:
    """Apply %-style formatting the way stdlib logging does, without ever raising.

    With no arguments the template is returned untouched. A single non-empty
    mapping argument is used for ``%(name)s`` style templates.
    """
    if not args:
        return format
    values: Any = args
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        values = args[0]
    try:
        return format % values
    except Exception:
        return f"{format} %!(EXTRA {', '.join(safe_str(arg, repr) for arg in args)})"


def report_failure(exc: BaseException) -> None:
    """Report a record that could not be emitted on stderr; logging calls never raise."""
    print(
        f"logfacade: failed to emit log record ({type(exc).__name__}: {exc})",
        file=sys.stderr,
        flush=True,
    )


class Logger(ABC):
    """Abstract base class for loggers.

    Every adapter exposes the same call shapes per level:

    * ``info(*args)``: operands concatenated like ``print`` without separators
      between strings
    * ``infof(format, *args)``: %-style template
    * ``infoln(*args)``: operands separated by spaces
    * ``infow(message, *args)``: message plus flat key/value pairs, see
      :func:`logfacade.fields.pair_fields`

    ``fatal*`` calls flush the output and then terminate the process with
    status 1 through ``exit_func`` (``os._exit`` unless overridden).

    Capabilities an engine does not have (identity metadata, level control)
    are still callable and documented as no-ops by that adapter.
    """

    name: str
    prog: str
    exit_func: Optional[Callable[[int], Any]] = None

    @abstractmethod
    def _log(self, level: int, message: str, fields: Optional[dict[str, Any]] = None) -> None:
        """Hand one record to the engine.

        Args:
            level: stdlib logging level number
            message: Fully formatted message
            fields: Paired structured fields, if any
        """

    @abstractmethod
    def _write(self, text: str) -> None:
        """Write text to the current sink, bypassing levels and structuring."""

    @abstractmethod
    def flush(self) -> None:
        """Flush the current sink."""

    @abstractmethod
    def set_level(self, level: str) -> None:
        """Set the minimum level (debug, info, warn, error, fatal).

        Names are case-insensitive. Unknown names are ignored and leave the
        current level unchanged.
        """

    @property
    @abstractmethod
    def level(self) -> str:
        """Current minimum level name."""

    @abstractmethod
    def set_name(self, name: str) -> None:
        """Set the context/subsystem name attached to later records."""

    @abstractmethod
    def set_prog(self, prog: str) -> None:
        """Set the program name attached to later records."""

    @abstractmethod
    def get_output(self) -> Optional[Any]:
        """Return the current sink, or None if output is discarded."""

    @abstractmethod
    def set_output(self, sink: Optional[Any]) -> None:
        """Replace the sink. Safe to call at any time, including concurrently with logging.

        Args:
            sink: Object with a text ``write`` method, or None to discard output
        """

    @abstractmethod
    def stdlib_logger(self) -> Optional[logging.Logger]:
        """Return the wrapped stdlib logger, or None if this adapter does not wrap one."""

    @abstractmethod
    def structlog_logger(self) -> Optional[Any]:
        """Return the wrapped structlog logger, or None if this adapter does not wrap one."""

    def get_writer(self) -> Optional[Any]:
        """Alias of :meth:`get_output`."""
        return self.get_output()

    def _sanitize(self, args: tuple[Any, ...]) -> tuple[Any, ...]:
        """Hook for adapters that clean arguments before they reach the engine."""
        return args

    def _sanitize_text(self, text: str) -> str:
        return text

    def _emit(self, level: int, args: tuple[Any, ...]) -> None:
        self._log(level, sprint(self._sanitize(args)))

    def _emitf(self, level: int, format: str, args: tuple[Any, ...]) -> None:
        self._log(level, sprintf(self._sanitize_text(format), self._sanitize(args)))

    def _emitln(self, level: int, args: tuple[Any, ...]) -> None:
        self._log(level, sprintln(self._sanitize(args)))

    def _emitw(self, level: int, message: str, args: tuple[Any, ...]) -> None:
        self._log(level, self._sanitize_text(message), pair_fields(self._sanitize(args)))

    def _terminate(self) -> None:
        self.flush()
        (self.exit_func or os._exit)(1)

    def debug(self, *args: Any) -> None:
        """Log a debug message.

        Args:
            *args: Operands concatenated into the message
        """
        self._emit(logging.DEBUG, args)

    def debugf(self, format: str, *args: Any) -> None:
        """Log a debug message from a %-style template.

        Args:
            format: Template such as ``"retries=%d"``
            *args: Values for the template
        """
        self._emitf(logging.DEBUG, format, args)

    def debugln(self, *args: Any) -> None:
        """Log a debug message with operands separated by spaces."""
        self._emitln(logging.DEBUG, args)

    def debugw(self, message: str, *args: Any) -> None:
        """Log a debug message with structured fields.

        Args:
            message: Log message
            *args: Alternating keys and values
        """
        self._emitw(logging.DEBUG, message, args)

    def info(self, *args: Any) -> None:
        """Log an info message.

        Args:
            *args: Operands concatenated into the message
        """
        self._emit(logging.INFO, args)

    def infof(self, format: str, *args: Any) -> None:
        """Log an info message from a %-style template."""
        self._emitf(logging.INFO, format, args)

    def infoln(self, *args: Any) -> None:
        """Log an info message with operands separated by spaces."""
        self._emitln(logging.INFO, args)

    def infow(self, message: str, *args: Any) -> None:
        """Log an info message with structured fields.

        Args:
            message: Log message
            *args: Alternating keys and values
        """
        self._emitw(logging.INFO, message, args)

    # print* are info-level aliases
    print = info
    printf = infof
    println = infoln
    printw = infow

    def warn(self, *args: Any) -> None:
        """Log a warning message."""
        self._emit(logging.WARNING, args)

    def warnf(self, format: str, *args: Any) -> None:
        """Log a warning message from a %-style template."""
        self._emitf(logging.WARNING, format, args)

    def warnln(self, *args: Any) -> None:
        """Log a warning message with operands separated by spaces."""
        self._emitln(logging.WARNING, args)

    def warnw(self, message: str, *args: Any) -> None:
        """Log a warning message with structured fields."""
        self._emitw(logging.WARNING, message, args)

    def error(self, *args: Any) -> None:
        """Log an error message."""
        self._emit(logging.ERROR, args)

    def errorf(self, format: str, *args: Any) -> None:
        """Log an error message from a %-style template."""
        self._emitf(logging.ERROR, format, args)

    def errorln(self, *args: Any) -> None:
        """Log an error message with operands separated by spaces."""
        self._emitln(logging.ERROR, args)

    def errorw(self, message: str, *args: Any) -> None:
        """Log an error message with structured fields."""
        self._emitw(logging.ERROR, message, args)

    def fatal(self, *args: Any) -> None:
        """Log a fatal message, flush the output and exit with status 1."""
        self._emit(logging.CRITICAL, args)
        self._terminate()

    def fatalf(self, format: str, *args: Any) -> None:
        """Log a fatal message from a %-style template, then exit."""
        self._emitf(logging.CRITICAL, format, args)
        self._terminate()

    def fatalln(self, *args: Any) -> None:
        """Log a fatal message with operands separated by spaces, then exit."""
        self._emitln(logging.CRITICAL, args)
        self._terminate()

    def fatalw(self, message: str, *args: Any) -> None:
        """Log a fatal message with structured fields, then exit."""
        self._emitw(logging.CRITICAL, message, args)
        self._terminate()

    def raw(self, *args: Any) -> None:
        """Write operands to the sink as-is, with no level filtering or record encoding."""
        self._write(sprint(self._sanitize(args)))

    def rawf(self, format: str, *args: Any) -> None:
        """Write a %-style formatted string to the sink as-is."""
        self._write(sprintf(self._sanitize_text(format), self._sanitize(args)))

    def rawln(self, *args: Any) -> None:
        """Write space-separated operands and a newline to the sink as-is."""
        self._write(sprintln(self._sanitize(args)) + "\n")
