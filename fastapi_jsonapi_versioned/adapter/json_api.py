"""JSON:API adapter: turns serializers into a top-level document."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from fastapi_jsonapi_versioned.adapter.relationship import Relationship
from fastapi_jsonapi_versioned.config import JSONAPISettings, log, resolve_settings
from fastapi_jsonapi_versioned.core.document import JSONAPIDocumentBuilder
from fastapi_jsonapi_versioned.core.errors import Error
from fastapi_jsonapi_versioned.serializers.base import JSONAPISerializer
from fastapi_jsonapi_versioned.serializers.errors import ErrorSerializer
from fastapi_jsonapi_versioned.utils.collections import is_sequence
from fastapi_jsonapi_versioned.utils.include import parse_include


class JSONAPIAdapter:
    """Build a JSON:API document for a resource, a collection or errors.

    :param payload: resource, sequence of resources, error(s) or None
    :param serializer: serializer class for a single resource
    :param each_serializer: serializer class applied to every collection element
    :param include: include paths (``"author,comments.author"``, list or tree)
    :param fields: sparse fieldsets, ``{type: [field, ...]}``
    :param meta: top-level meta
    :param links: top-level links
    :param base_url: prefix of resource and relationship links
    """

    document_builder_class = JSONAPIDocumentBuilder

    def __init__(
        self,
        payload: Any,
        *,
        serializer: type | None = None,
        each_serializer: type | None = None,
        include: Any = None,
        fields: Mapping[str, Iterable[str]] | None = None,
        meta: Mapping[str, Any] | None = None,
        links: Mapping[str, Any] | None = None,
        base_url: str | None = None,
        settings: JSONAPISettings | None = None,
        **options: Any,
    ) -> None:
        self.payload = payload
        self.serializer = serializer
        self.each_serializer = each_serializer
        self.include = parse_include(include)
        self.fields = {key: list(value) for key, value in (fields or {}).items()}
        self.meta = meta
        self.links = links
        self.base_url = base_url
        self.settings = resolve_settings(settings)
        self.options = options

    def as_json(self) -> dict[str, Any]:
        builder = self.document_builder_class()
        if is_sequence(self.payload):
            # JSON:API collections hold resource objects only
            items = [item for item in self.payload if item is not None]
            serializers = [self._bind(item, self.each_serializer) for item in items]
            if serializers and all(isinstance(item, ErrorSerializer) for item in serializers):
                return builder.build_error(
                    [item.as_error_object() for item in serializers], meta=self.meta
                )
            seen = {self._identity(item) for item in serializers}
            data = [self.resource_object(item, self.include) for item in serializers]
            included = self.included(serializers, self.include, seen)
            return builder.build_collection(
                data, included=included, links=self.links, meta=self.meta
            )

        if self.payload is None:
            return builder.build_single(None, links=self.links, meta=self.meta)

        serializer = self._bind(self.payload, self.serializer)
        if isinstance(serializer, ErrorSerializer):
            return builder.build_error([serializer.as_error_object()], meta=self.meta)
        included = self.included([serializer], self.include, {self._identity(serializer)})
        return builder.build_single(
            self.resource_object(serializer, self.include),
            included=included,
            links=self.links,
            meta=self.meta,
        )

    def resource_object(self, serializer: JSONAPISerializer, include_tree: Mapping[str, Any]) -> dict[str, Any]:
        """Return the resource object of ``serializer`` with its relationships."""
        fields = self.fields.get(serializer.json_type) or None
        resource: dict[str, Any] = {"type": serializer.json_type, "id": serializer.get_id()}
        attributes = serializer.get_attributes(fields)
        if attributes:
            resource["attributes"] = attributes
        relationships = {}
        for association in serializer.associations(fields):
            relationship = Relationship(
                serializer, self.options, association, include_tree, settings=self.settings
            ).as_json()
            if relationship:
                relationships[association.name] = relationship
        if relationships:
            resource["relationships"] = relationships
        links = serializer.resource_links()
        if links:
            resource["links"] = links
        return resource

    def included(
        self,
        serializers: list[JSONAPISerializer],
        include_tree: Mapping[str, Any],
        seen: set[tuple[str, Any]],
    ) -> list[dict[str, Any]]:
        """Collect the included resources of ``serializers``, each resource once."""
        included: list[dict[str, Any]] = []
        if not include_tree:
            return included
        for serializer in serializers:
            for association in serializer.associations():
                if association.name not in include_tree:
                    continue
                subtree = include_tree[association.name]
                related = association.serializer
                related = related if isinstance(related, (list, tuple)) else [related]
                related = [item for item in related if item is not None and item.object is not None]
                for item in related:
                    identity = self._identity(item)
                    if identity in seen:
                        continue
                    seen.add(identity)
                    included.append(self.resource_object(item, subtree))
                included.extend(self.included(related, subtree, seen))
        return included

    def _bind(self, item: Any, serializer_class: type | None) -> Any:
        if serializer_class is None:
            if isinstance(item, Error):
                serializer_class = ErrorSerializer
            else:
                serializer_class = JSONAPISerializer.serializer_for(item, settings=self.settings)
                if serializer_class is None:
                    log.debug("No serializer found for %r, using JSONAPISerializer", item)
                    serializer_class = JSONAPISerializer
        if issubclass(serializer_class, ErrorSerializer):
            return serializer_class(item)
        return serializer_class(item, base_url=self.base_url, settings=self.settings)

    @staticmethod
    def _identity(serializer: JSONAPISerializer) -> tuple[str, Any]:
        # unsaved records have no id yet, tell them apart by the object itself
        resource_id = serializer.get_id()
        if not resource_id:
            return serializer.json_type, id(serializer.object)
        return serializer.json_type, resource_id
