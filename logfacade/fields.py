# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Key/value field pairing for structured log calls."""

from collections.abc import Iterable, Sequence
from typing import Any, Callable


def safe_str(value: Any, convert: Callable[[Any], str] = str) -> str:
    """Stringify a value, returning a ``%!v(PANIC=...)`` marker if its conversion raises."""
    try:
        return convert(value)
    except Exception as e:
        return f"%!v(PANIC={type(e).__name__})"


def pair_fields(args: Sequence[Any]) -> dict[str, Any]:
    """Turn a flat ``key, value, key, value, ...`` sequence into a dict.

    Keys are stringified with :func:`safe_str`; values are kept as-is. A trailing
    key without a value maps to ``None`` rather than raising, so callers can
    pass a lone flag at the end of the list. Duplicate keys follow normal
    dict semantics (last value wins, first position kept).

    Args:
        args: Alternating keys and values

    Returns:
        Ordered mapping of field names to values

    Example:
        >>> pair_fields(("method", "GET", "path"))
        {'method': 'GET', 'path': None}
    """
    fields: dict[str, Any] = {}
    for i in range(len(args)):
        if i % 2 == 0:
            fields[safe_str(args[i])] = None
            continue
        fields[safe_str(args[i - 1])] = args[i]
    return fields


def resolve_clashes(fields: dict[str, Any], reserved: Iterable[str]) -> dict[str, Any]:
    """Rename fields that collide with keys the engine writes itself.

    A field named like a reserved key (e.g. ``level``) is moved to
    ``fields.<key>`` so it cannot overwrite record metadata.

    Args:
        fields: Paired fields
        reserved: Keys owned by the engine

    Returns:
        A new dict with clashing keys renamed, order preserved
    """
    reserved = set(reserved)
    if not reserved.intersection(fields):
        return fields
    return {
        (f"fields.{key}" if key in reserved else key): value
        for key, value in fields.items()
    }
