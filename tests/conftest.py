# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Shared fixtures for logfacade tests."""

import io
import json
import logging

import pytest
import structlog

import logfacade.factory as factory
from logfacade.json_logger import ENGINE_NAME
from logfacade.structured_logger import StdlibRedirectHandler


def _clear_engine() -> None:
    engine = logging.getLogger(ENGINE_NAME)
    for handler in list(engine.handlers):
        engine.removeHandler(handler)
    engine.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Reset global logging state touched by the adapters before and after each test."""
    root = logging.getLogger()
    saved_level = root.level
    _clear_engine()
    factory._default_registry = factory.LoggerRegistry()
    yield
    structlog.reset_defaults()
    for handler in list(root.handlers):
        if isinstance(handler, StdlibRedirectHandler):
            root.removeHandler(handler)
    root.setLevel(saved_level)
    _clear_engine()
    factory._default_registry = factory.LoggerRegistry()


class ExitRecorder:
    """Stand-in for os._exit that records the status and the sink contents at exit time."""

    def __init__(self, sink: io.StringIO):
        self.sink = sink
        self.calls: list[tuple[int, str]] = []

    def __call__(self, code: int) -> None:
        self.calls.append((code, self.sink.getvalue()))


@pytest.fixture
def sink() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def exit_recorder(sink) -> ExitRecorder:
    return ExitRecorder(sink)


def read_records(sink: io.StringIO) -> list[dict]:
    """Parse every line written to a sink as JSON."""
    return [json.loads(line) for line in sink.getvalue().splitlines() if line.strip()]


@pytest.fixture
def records(sink):
    """Return a callable that parses the JSON records written to ``sink`` so far."""
    return lambda: read_records(sink)
