"""Pydantic schemas for JSON:API v1.1 documents.

The renderer returns plain dicts, these models are for callers validating
rendered documents (or incoming ones), e.g.
``JSONAPIDocument.model_validate(renderer.render(order))``.
``JSONAPIResourceIdentifier`` also builds resource linkage in the adapter.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict


class JSONAPIResourceIdentifier(BaseModel):
    """Resource identifier object: type + id."""

    model_config = ConfigDict(extra="forbid")

    type: str
    id: str
    meta: Optional[Dict[str, Any]] = None


class JSONAPIRelationship(BaseModel):
    """Relationship object, every member is optional."""

    model_config = ConfigDict(extra="forbid")

    data: Optional[Union[JSONAPIResourceIdentifier, List[JSONAPIResourceIdentifier], Any]] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Any] = None


class JSONAPIResource(BaseModel):
    """Resource object with attributes and relationships."""

    type: str
    id: Optional[str] = None
    attributes: Optional[Dict[str, Any]] = None
    relationships: Optional[Dict[str, JSONAPIRelationship]] = None
    links: Optional[Dict[str, Any]] = None


class JSONAPIDocument(BaseModel):
    """Top-level JSON:API document."""

    model_config = ConfigDict(extra="forbid")

    data: Optional[Union[JSONAPIResource, List[JSONAPIResource]]] = None
    included: Optional[List[JSONAPIResource]] = None
    meta: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Any]] = None


class JSONAPIErrorDocument(BaseModel):
    """Top-level JSON:API error document."""

    model_config = ConfigDict(extra="forbid")

    errors: List[Dict[str, Any]]
    meta: Optional[Dict[str, Any]] = None
