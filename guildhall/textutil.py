"""Small helpers: JSON access, a wrapping tick counter and text fields."""

from __future__ import annotations

import json
from typing import Any


def parse_json(text: str) -> Any:
    """Parse a JSON document."""
    return json.loads(text)


def json_field(key: str, data: dict) -> Any:
    """Return ``data[key]``; a missing or null field is an error."""
    if key not in data:
        raise KeyError(key)
    value = data[key]
    if value is None:
        raise ValueError(f"field {key!r} is null")
    return value


def fit_text(text: str, size: int) -> str:
    """Cut ``text`` to fit a field of ``size`` characters with a terminator."""
    if size < 1:
        raise ValueError("size must be at least 1")
    return text[: size - 1]


def _truncating_mod(a: int, b: int) -> int:
    rem = abs(a) % abs(b)
    return -rem if a < 0 else rem


class TickCounter:
    """Counts ticks and wraps around after ``value`` of them."""

    def __init__(self, value: int) -> None:
        if value == 0:
            raise ValueError("period must not be zero")
        self.period = value
        self.tick = 0

    def add(self, value: int = 1) -> int:
        """Advance by ``value`` ticks and return the new tick."""
        self.tick = _truncating_mod(self.tick + value, self.period)
        return self.tick

    def reset(self, value: int = -1) -> None:
        self.tick = value