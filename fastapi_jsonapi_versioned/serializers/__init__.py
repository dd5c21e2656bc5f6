"""Serializers for JSON:API resources and errors."""

from .base import Association, JSONAPISerializer, RelationshipField
from .errors import ErrorSerializer

__all__ = ["Association", "ErrorSerializer", "JSONAPISerializer", "RelationshipField"]
