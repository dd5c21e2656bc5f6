"""Render payloads as JSON:API documents with versioned serializers."""

from __future__ import annotations

from typing import Any, Callable, Protocol

from fastapi import Request
from fastapi.encoders import jsonable_encoder

from fastapi_jsonapi_versioned.adapter.json_api import JSONAPIAdapter
from fastapi_jsonapi_versioned.config import JSONAPISettings, log, resolve_settings
from fastapi_jsonapi_versioned.core.errors import Error
from fastapi_jsonapi_versioned.core.registry import serializer_registry
from fastapi_jsonapi_versioned.core.versioning import version_module
from fastapi_jsonapi_versioned.rendering.responses import JSONAPIResponse
from fastapi_jsonapi_versioned.serializers.base import JSONAPISerializer
from fastapi_jsonapi_versioned.serializers.errors import ErrorSerializer
from fastapi_jsonapi_versioned.utils.collections import is_sequence


class Renderer(Protocol):
    """Anything able to render a payload into a response document."""

    def render(self, payload: Any, **options: Any) -> Any:
        ...


class DocumentRenderer:
    """Select serializers for a payload and render it through the JSON:API adapter.

    ``owner`` determines the API version: serializers are looked up in the
    version namespace of the owner (a controller class, an instance or a
    qualified name such as ``"API.V1.OrdersController"``).

    One renderer is created per request, ``meta`` collects top-level meta
    for that request only::

        renderer = DocumentRenderer(OrdersController)
        renderer.meta["redirect_url"] = url
        document = renderer.render(order, include="items")
    """

    adapter_class = JSONAPIAdapter
    error_serializer = ErrorSerializer

    def __init__(self, owner: Any, *, settings: JSONAPISettings | None = None) -> None:
        self.owner = owner
        self.settings = resolve_settings(settings)
        self._meta: dict[str, Any] | None = None

    @property
    def meta(self) -> dict[str, Any]:
        """Top-level meta of the rendered document, e.g. ``meta["redirect_url"] = ...``."""
        if self._meta is None:
            self._meta = {}
        return self._meta

    def render(self, payload: Any, **options: Any) -> dict[str, Any]:
        """Render ``payload`` (resource, collection, error(s) or None) as a JSON:API document."""
        options["adapter"] = self.adapter_class
        if self.meta:
            options["meta"] = {**(options.get("meta") or {}), **self.meta}

        if is_sequence(payload):
            first = next((item for item in payload if item is not None), None)
            if isinstance(first, Error):
                options["each_serializer"] = options.get("each_serializer") or self.error_serializer
            elif first is not None:
                options["each_serializer"] = options.get("each_serializer") or self.serializer_for(first)
        elif isinstance(payload, Error):
            options["serializer"] = options.get("serializer") or self.error_serializer
        elif payload is not None:
            options["serializer"] = options.get("serializer") or self.serializer_for(payload)

        return self.render_document(payload, options)

    def render_document(self, payload: Any, options: dict[str, Any]) -> dict[str, Any]:
        """Build the document with the adapter selected in ``options``."""
        adapter_class = options.pop("adapter")
        options.setdefault("settings", self.settings)
        return adapter_class(payload, **options).as_json()

    def render_response(
        self, payload: Any, *, status_code: int | None = None, **options: Any
    ) -> JSONAPIResponse:
        """Render ``payload`` into a ``JSONAPIResponse``, errors use their own status."""
        document = self.render(payload, **options)
        if status_code is None:
            status_code = _error_status(payload) or 200
        return JSONAPIResponse(jsonable_encoder(document), status_code=status_code)

    def serializer_for(self, record: Any) -> type | None:
        """Find the serializer of ``record`` in the owner's version.

        ``JSONAPISerializer.serializer_for`` resolves relative to the serializer
        class itself, the renderer resolves relative to its owner so a
        ``V1`` controller gets ``V1.<Record>Serializer``.
        """
        if not JSONAPISerializer.valid_for_serialization(record):
            return None
        name = version_module(self.owner, f"{type(record).__name__}Serializer", settings=self.settings)
        serializer = serializer_registry.lookup(name, settings=self.settings)
        if serializer is None:
            log.debug("No serializer registered as %s", name)
        return serializer


def _error_status(payload: Any) -> int | None:
    errors = [item for item in payload if item is not None] if is_sequence(payload) else [payload]
    if errors and isinstance(errors[0], Error):
        return errors[0].status_code
    return None


def renderer_dependency(
    owner: Any, *, settings: JSONAPISettings | None = None
) -> Callable[[Request], DocumentRenderer]:
    """Return a FastAPI dependency creating one renderer per request.

    Examples:
        get_renderer = renderer_dependency("API.V1.OrdersController")

        @router.get("/orders/{order_id}")
        def show(order_id: int, renderer: DocumentRenderer = Depends(get_renderer)):
            return renderer.render_response(load_order(order_id))
    """

    def get_renderer(request: Request):
        renderer = DocumentRenderer(owner, settings=settings)
        request.state.jsonapi_renderer = renderer
        return renderer

    return get_renderer
