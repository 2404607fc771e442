# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Swappable output indirection for engines that bind their sink at construction."""

import threading
from typing import Any, Optional


class OutputProxy:
    """Single-slot, lock-guarded wrapper around a writable text sink.

    The proxy is what an engine is built against; the real sink can be
    replaced later with :meth:`set_sink` without rebuilding the engine.
    Writes made while no sink is set are dropped and report zero characters
    written.

    Example:
        >>> import io
        >>> proxy = OutputProxy()
        >>> proxy.write("dropped")
        0
        >>> buf = io.StringIO()
        >>> proxy.set_sink(buf)
        >>> proxy.write("kept")
        4
    """

    def __init__(self, sink: Optional[Any] = None):
        self._sink = sink
        self._lock = threading.Lock()

    def set_sink(self, sink: Optional[Any]) -> None:
        """Replace the current sink. ``None`` discards all later writes."""
        with self._lock:
            self._sink = sink

    def get_sink(self) -> Optional[Any]:
        """Return the current sink, or ``None`` if unset."""
        with self._lock:
            return self._sink

    def write(self, text: str) -> int:
        """Forward text to the current sink.

        Args:
            text: Text to write

        Returns:
            Number of characters the sink reports written, or 0 if no sink is set
        """
        with self._lock:
            if self._sink is None:
                return 0
            written = self._sink.write(text)
        return len(text) if written is None else written

    def flush(self) -> None:
        """Flush the current sink if it supports flushing."""
        with self._lock:
            flush = getattr(self._sink, "flush", None)
            if flush is not None:
                flush()
