# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Configuration models and level tables shared by the logger adapters."""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Optional

DEFAULT_PROG = "APP"
DEFAULT_NAME = "cli"

# Names accepted by Logger.set_level
LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}

# Configuration additionally tolerates the stdlib spellings
CONFIG_LEVELS: dict[str, int] = {
    **LEVELS,
    "warning": logging.WARNING,
    "critical": logging.CRITICAL,
}

LEVEL_NAMES: dict[int, str] = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "fatal",
}

ENCODINGS = ("json", "console")


def parse_level(level: str) -> int:
    """Translate a configured level name into a stdlib level number.

    Args:
        level: Level name, case-insensitive

    Returns:
        stdlib logging level number

    Raises:
        ValueError: If the level name is not recognized
    """
    try:
        return CONFIG_LEVELS[level.lower()]
    except KeyError:
        raise ValueError(
            f"Invalid log level: {level}. Must be one of {list(CONFIG_LEVELS.keys())}"
        ) from None


def level_name(levelno: int) -> str:
    """Return the facade's name for a stdlib level number."""
    return LEVEL_NAMES.get(levelno, logging.getLevelName(levelno).lower())


@dataclass
class StructuredConfig:
    """Construction settings for the structlog-backed adapter.

    Attributes:
        level: Minimum level emitted (debug, info, warn, error, fatal)
        encoding: "json", "console", or "" for the engine default (json)
        initial_fields: Static fields attached to every record, emitted in key order
    """
    level: str = "info"
    encoding: str = "json"
    initial_fields: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        parse_level(self.level)
        if self.encoding and self.encoding.lower() not in ENCODINGS:
            raise ValueError(
                f"Invalid log encoding: {self.encoding}. Must be one of {list(ENCODINGS)}"
            )

    @property
    def min_level(self) -> int:
        return parse_level(self.level)

    @property
    def renderer_name(self) -> str:
        return (self.encoding or "json").lower()

    def sorted_initial_fields(self) -> dict[str, Any]:
        """Return the static fields ordered by key for reproducible output."""
        return {key: self.initial_fields[key] for key in sorted(self.initial_fields)}

    @classmethod
    def from_env(
        cls,
        level: Optional[str] = None,
        encoding: Optional[str] = None,
        initial_fields: Optional[dict[str, Any]] = None,
    ) -> "StructuredConfig":
        """Build a config from explicit values, then LOG_LEVEL / LOG_ENCODING, then defaults.

        Raises:
            ValueError: If the resulting level or encoding is invalid
        """
        return cls(
            level=level or os.getenv("LOG_LEVEL") or "info",
            encoding=encoding if encoding is not None else os.getenv("LOG_ENCODING", "json"),
            initial_fields=dict(initial_fields or {}),
        )
