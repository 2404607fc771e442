# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Structured logging facade.

One abstract :class:`Logger` contract, backed interchangeably by a
line-delimited JSON engine (stdlib logging) or a structlog engine, with
output that can be redirected after the logger is built.

Example:
    >>> import io
    >>> from logfacade import create_logger
    >>>
    >>> logger = create_logger(logger_type="json", name="ingest", prog="copilot")
    >>> logger.set_output(io.StringIO())
    >>> logger.infow("request", "method", "GET", "path")
    >>>
    >>> # Ambient logging shared across modules
    >>> from logfacade import get_logger
    >>> get_logger(__name__).warnf("retrying in %ds", 5)
"""

__version__ = "0.1.0"

from .config import StructuredConfig
from .factory import LoggerRegistry, create_logger, default_registry, get_logger, set_default_logger
from .fields import pair_fields
from .json_logger import JSONFormatter, JSONLogger
from .logger import Logger
from .proxy import OutputProxy
from .sanitize import strip_control_sequences
from .structured_logger import StructuredLogger

__all__ = [
    "__version__",
    "JSONFormatter",
    "JSONLogger",
    "Logger",
    "LoggerRegistry",
    "OutputProxy",
    "StructuredConfig",
    "StructuredLogger",
    "create_logger",
    "default_registry",
    "get_logger",
    "pair_fields",
    "set_default_logger",
    "strip_control_sequences",
]
