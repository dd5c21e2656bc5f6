"""JSON:API relationship objects.

See https://jsonapi.org/format/#document-resource-object-relationships
"""

from __future__ import annotations

from typing import Any, Mapping

from fastapi_jsonapi_versioned.adapter.identifiers import Link, ResourceIdentifier
from fastapi_jsonapi_versioned.config import JSONAPISettings, resolve_settings
from fastapi_jsonapi_versioned.serializers.base import Association


class Relationship:
    """Render one association of a resource as ``{data, links, meta}``.

    ``data`` is only rendered when the association allows it and, with
    ``optimize_relationships`` enabled, only when the association was included.
    A to-one association without a related object renders ``"data": None``.
    """

    def __init__(
        self,
        parent_serializer: Any,
        serializable_resource_options: Mapping[str, Any],
        association: Association,
        included_associations: Mapping[str, Any],
        *,
        settings: JSONAPISettings | None = None,
    ) -> None:
        self.parent_serializer = parent_serializer
        self.serializable_resource_options = serializable_resource_options
        self.association = association
        self.included_associations = included_associations
        self.settings = resolve_settings(settings)

    def as_json(self) -> dict[str, Any]:
        relationship: dict[str, Any] = {}

        if self.association.options.get("include_data") and (
            not self.settings.optimize_relationships
            or self.association.name in self.included_associations
        ):
            relationship["data"] = self.data_for(self.association)

        links = self.links_for(self.association)
        if links:
            relationship["links"] = links

        meta = self.meta_for(self.association)
        if meta is not None:
            relationship["meta"] = meta

        return relationship

    def data_for(self, association: Association) -> Any:
        serializer = association.serializer
        if isinstance(serializer, (list, tuple)):
            return [
                ResourceIdentifier(item, self.serializable_resource_options).as_json()
                for item in serializer
            ]
        virtual_value = association.options.get("virtual_value")
        if virtual_value is not None:
            return virtual_value
        if serializer is not None and serializer.object is not None:
            return ResourceIdentifier(serializer, self.serializable_resource_options).as_json()
        return None

    def links_for(self, association: Association) -> dict[str, Any]:
        links = {}
        for key, value in association.links.items():
            result = Link(self.parent_serializer, value).as_json()
            if result:
                links[key] = result
        return links

    def meta_for(self, association: Association) -> Any:
        meta = association.meta
        return meta(self.parent_serializer) if callable(meta) else meta
