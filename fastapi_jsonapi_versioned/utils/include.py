"""Helpers for JSON:API ``include`` parameters."""

from __future__ import annotations

from typing import Any, Iterable, Mapping


def _split_csv(value: str) -> list[str]:
    return [item for item in (part.strip() for part in value.split(",")) if item]


def parse_include(value: str | Iterable[str] | Mapping[str, Any] | None) -> dict[str, Any]:
    """Normalize an include parameter into a nested tree.

    ``"author,comments.author"`` becomes ``{"author": {}, "comments": {"author": {}}}``.
    Mappings are assumed to already be trees and are copied.
    """
    if not value:
        return {}
    if isinstance(value, Mapping):
        return {key: parse_include(sub) for key, sub in value.items()}
    paths = _split_csv(value) if isinstance(value, str) else [
        path for item in value for path in _split_csv(item)
    ]
    tree: dict[str, Any] = {}
    for path in paths:
        node = tree
        for part in (segment for segment in path.split(".") if segment):
            node = node.setdefault(part, {})
    return tree
