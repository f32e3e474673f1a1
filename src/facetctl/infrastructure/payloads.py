"""JSON payload files captured from the taxonomy and adaptive-count endpoints.

The term payload is a JSON list of nested terms (or an object holding that
list under ``terms``); the count payload is the ``narrowed_values`` object.
Validation of their shape belongs to the domain models; this module only
gets the JSON off disk.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class PayloadError(Exception):
    """A payload file is missing, unreadable, or not the expected JSON shape."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def read_json(path: Path) -> Any:
    """Parse a UTF-8 JSON file.

    Raises:
        PayloadError: if the file cannot be read or parsed.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PayloadError(path, exc.strerror or str(exc)) from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PayloadError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc


def read_term_payload(path: Path) -> list[Any]:
    """Read a nested term list."""
    data = read_json(path)
    if isinstance(data, dict) and "terms" in data:
        data = data["terms"]
    if not isinstance(data, list):
        raise PayloadError(path, "expected a JSON list of terms")
    return data


def read_count_payload(path: Path) -> dict[str, Any]:
    """Read a ``narrowed_values`` snapshot."""
    data = read_json(path)
    if isinstance(data, dict) and "narrowed_values" in data:
        data = data["narrowed_values"]
    if not isinstance(data, dict):
        raise PayloadError(path, "expected a JSON object of narrowed values")
    return data
