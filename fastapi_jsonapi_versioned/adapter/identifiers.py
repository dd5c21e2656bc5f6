"""Resource identifier and link objects."""

from __future__ import annotations

from typing import Any, Mapping

from fastapi_jsonapi_versioned.schemas.resource import JSONAPIResourceIdentifier


class ResourceIdentifier:
    """Minimal ``{type, id}`` reference to the resource of a serializer."""

    def __init__(self, serializer: Any, options: Mapping[str, Any] | None = None) -> None:
        self.serializer = serializer
        self.options = options or {}

    def as_json(self) -> dict[str, Any]:
        identifier = JSONAPIResourceIdentifier(
            type=self.serializer.json_type, id=self.serializer.get_id()
        )
        return identifier.model_dump(exclude_none=True)


class Link:
    """Render a link spec in the context of the serializer that declares it.

    A spec is a url string, a link object mapping (``href``/``meta``) or a
    callable receiving the serializer and returning either of those.
    """

    def __init__(self, serializer: Any, value: Any) -> None:
        self.serializer = serializer
        self.value = value

    def as_json(self) -> Any:
        value = self.value(self.serializer) if callable(self.value) else self.value
        if isinstance(value, Mapping):
            link = {
                key: item(self.serializer) if callable(item) else item
                for key, item in value.items()
            }
            link = {key: item for key, item in link.items() if item is not None}
            return link or None
        return value or None
