"""Payload shape helpers."""

from __future__ import annotations

from typing import Any, Mapping


def is_sequence(value: Any) -> bool:
    """Return True for list-like payloads (not strings, bytes or mappings)."""
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return False
    return hasattr(value, "__iter__") and hasattr(value, "__len__")
