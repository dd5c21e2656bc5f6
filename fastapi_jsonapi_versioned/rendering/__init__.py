"""Document rendering with versioned serializer selection."""

from .renderer import DocumentRenderer, Renderer, renderer_dependency
from .responses import JSONAPI_MEDIA_TYPE, JSONAPIResponse

__all__ = [
    "DocumentRenderer",
    "JSONAPIResponse",
    "JSONAPI_MEDIA_TYPE",
    "Renderer",
    "renderer_dependency",
]
