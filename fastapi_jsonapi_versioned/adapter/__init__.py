"""JSON:API adapter."""

from .identifiers import Link, ResourceIdentifier
from .json_api import JSONAPIAdapter
from .relationship import Relationship

__all__ = ["JSONAPIAdapter", "Link", "Relationship", "ResourceIdentifier"]
