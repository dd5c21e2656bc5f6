"""JSON:API top-level document construction."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from fastapi_jsonapi_versioned.core.errors import JSONAPIErrorBuilder


class JSONAPIDocumentBuilder:
    """Build JSON:API v1.1 documents from serialized resource objects."""

    def build_single(
        self,
        resource: Mapping[str, Any] | None,
        *,
        included: Iterable[Mapping[str, Any]] | None = None,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API document for a single (possibly null) resource object."""
        document: dict[str, Any] = {"data": None if resource is None else dict(resource)}
        return self._decorate(document, included=included, links=links, meta=meta)

    def build_collection(
        self,
        resources: Iterable[Mapping[str, Any]],
        *,
        included: Iterable[Mapping[str, Any]] | None = None,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API document for a collection of resources."""
        document: dict[str, Any] = {"data": [dict(item) for item in resources]}
        return self._decorate(document, included=included, links=links, meta=meta)

    def build_error(
        self,
        errors: Iterable[Mapping[str, Any]],
        *,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API error document from error objects."""
        document = JSONAPIErrorBuilder().error_document([dict(error) for error in errors])
        if meta:
            document["meta"] = dict(meta)
        return document

    def _decorate(
        self,
        document: dict[str, Any],
        *,
        included: Iterable[Mapping[str, Any]] | None,
        links: Mapping[str, Any] | None,
        meta: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        if included:
            document["included"] = [dict(item) for item in included]
        if links:
            document["links"] = dict(links)
        if meta:
            document["meta"] = dict(meta)
        return document
