"""Core JSON:API document, error, naming and registry helpers."""

from .document import JSONAPIDocumentBuilder
from .errors import Error, JSONAPIErrorBuilder, NotFoundError, ValidationError
from .registry import SerializerRegistry, serializer_registry
from .versioning import Versioning

__all__ = [
    "Error",
    "JSONAPIDocumentBuilder",
    "JSONAPIErrorBuilder",
    "NotFoundError",
    "SerializerRegistry",
    "ValidationError",
    "Versioning",
    "serializer_registry",
]
