"""Serializer for JSON:API error objects."""

from __future__ import annotations

from typing import Any, Mapping

from fastapi_jsonapi_versioned.core.errors import Error, JSONAPIErrorBuilder


class ErrorSerializer:
    """Serialize an :class:`Error` (or any exception) into a JSON:API error object.

    Error serializers are never looked up by name, the renderer always selects
    this class for error payloads.
    """

    builder_class = JSONAPIErrorBuilder

    def __init__(self, instance: Any, **options: Any) -> None:
        self.object = instance

    def as_error_object(self) -> dict[str, Any]:
        if isinstance(self.object, Error):
            return self.object.to_dict()
        if isinstance(self.object, Mapping):
            return self.builder_class().error_object(**self.object)
        return self.builder_class().error_object(
            status="500", title="Internal Server Error", detail=str(self.object)
        )
