"""Helpers for list-valued columns stored as JSON text."""

from __future__ import annotations

import json
from collections.abc import Iterable


def dump_list(values: Iterable | None) -> str | None:
    """Serialize a list for a JSON text column; ``None`` stays ``None``."""
    if values is None:
        return None
    return json.dumps(list(values))


def load_text_list(raw: str | list | None) -> tuple[str, ...]:
    """Read a JSON array of strings.

    A value that is not valid JSON is treated as a single entry, so text
    written by hand into the column is not lost.
    """
    if not raw:
        return ()
    if isinstance(raw, list):
        return tuple(str(item) for item in raw)
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return (raw,)
    if isinstance(parsed, list):
        return tuple(str(item) for item in parsed)
    return (str(parsed),)


def load_indices(raw: str | None) -> tuple[int, ...] | None:
    """Read a JSON array of indices; ``None`` means "no filtering".

    Raises:
        ValueError: If the column does not hold a JSON array of integers.
    """
    if raw is None:
        return None
    parsed = json.loads(raw)
    if not isinstance(parsed, list) or not all(
        isinstance(index, int) and not isinstance(index, bool) for index in parsed
    ):
        raise ValueError(f"Expected a JSON array of integers, got {raw!r}")
    return tuple(parsed)
