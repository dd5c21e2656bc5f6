"""Versioned JSON:API rendering for FastAPI."""

from .adapter.json_api import JSONAPIAdapter
from .config import JSONAPISettings, get_settings, log
from .core.errors import Error, NotFoundError, ValidationError
from .core.registry import serializer_registry
from .core.versioning import Versioning
from .rendering.renderer import DocumentRenderer, Renderer, renderer_dependency
from .rendering.responses import JSONAPIResponse
from .serializers.base import JSONAPISerializer, RelationshipField
from .serializers.errors import ErrorSerializer

__all__ = [
    "DocumentRenderer",
    "Error",
    "ErrorSerializer",
    "JSONAPIAdapter",
    "JSONAPIResponse",
    "JSONAPISerializer",
    "JSONAPISettings",
    "NotFoundError",
    "RelationshipField",
    "Renderer",
    "ValidationError",
    "Versioning",
    "get_settings",
    "log",
    "renderer_dependency",
    "serializer_registry",
]
