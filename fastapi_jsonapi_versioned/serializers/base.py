"""Base serializer for JSON:API resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from sqlalchemy import inspect
from sqlalchemy.orm.attributes import NO_VALUE

from fastapi_jsonapi_versioned.config import JSONAPISettings, log, resolve_settings
from fastapi_jsonapi_versioned.core.errors import Error
from fastapi_jsonapi_versioned.core.registry import serializer_registry
from fastapi_jsonapi_versioned.core.versioning import version_module
from fastapi_jsonapi_versioned.utils.collections import is_sequence

LinkSpec = str | Mapping[str, Any] | Callable[[Any], Any] | None
MetaSpec = Any


class RelationshipField:
    """Declare a relationship on a serializer.

    :param many: to-many relationship
    :param serializer: serializer class (or name resolved in the serializer's version) for the related objects
    :param include_data: render resource linkage (``data``)
    :param virtual_value: precomputed linkage used when no related object is loaded
    :param links: relationship links, name -> url, mapping or callable taking the parent serializer
    :param meta: relationship meta, static value or callable taking the parent serializer
    :param attribute: attribute to read on the instance (defaults to the field name)
    """

    def __init__(
        self,
        *,
        many: bool = False,
        serializer: type | str | None = None,
        include_data: bool = True,
        virtual_value: Any = None,
        links: Mapping[str, LinkSpec] | None = None,
        meta: MetaSpec = None,
        attribute: str | None = None,
    ) -> None:
        self.name = ""
        self.many = many
        self.serializer = serializer
        self.include_data = include_data
        self.virtual_value = virtual_value
        self.links = links
        self.meta = meta
        self.attribute = attribute

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"<RelationshipField {self.name} many={self.many}>"


@dataclass
class Association:
    """A relationship of a serialized resource, bound to its related serializer(s)."""

    name: str
    serializer: Any
    options: dict[str, Any] = field(default_factory=dict)
    links: dict[str, LinkSpec] = field(default_factory=dict)
    meta: MetaSpec = None


class JSONAPISerializer:
    """Serialize one model instance into a JSON:API resource object.

    Subclasses with a ``Meta.type_`` are registered in the serializer registry
    under their qualified name, see :mod:`fastapi_jsonapi_versioned.core.registry`.
    """

    jsonapi_namespace: str | None = None

    class Meta:
        """Serializer metadata (type, fields)."""

        type_: str = ""
        fields: list[str] = []

    _declared_relationships: dict[str, RelationshipField] = {}

    def __init_subclass__(cls, register: bool = True, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        declared: dict[str, RelationshipField] = {}
        for klass in reversed(cls.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, RelationshipField):
                    declared[name] = value
        cls._declared_relationships = declared
        if register and getattr(cls.Meta, "type_", ""):
            serializer_registry.register(cls)

    def __init__(
        self,
        instance: Any = None,
        *,
        base_url: str | None = None,
        settings: JSONAPISettings | None = None,
    ) -> None:
        self.object = instance
        self.base_url = base_url
        self.settings = resolve_settings(settings)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.object!r}>"

    @classmethod
    def valid_for_serialization(cls, record: Any) -> bool:
        """Return True if ``record`` can be rendered as a resource object."""
        if record is None or isinstance(record, (type, Error, str, bytes, int, float, bool)):
            return False
        if isinstance(record, Mapping) or is_sequence(record):
            return False
        if inspect(record, raiseerr=False) is not None:
            return True
        return hasattr(record, "id")

    @classmethod
    def serializer_for(
        cls, record: Any, *, settings: JSONAPISettings | None = None
    ) -> type | None:
        """Find the serializer of ``record`` in this serializer's version."""
        if not cls.valid_for_serialization(record):
            return None
        name = version_module(cls, f"{type(record).__name__}Serializer", settings=settings)
        return serializer_registry.lookup(name, settings=settings)

    @property
    def json_type(self) -> str:
        type_ = getattr(self.Meta, "type_", "")
        if type_:
            return type_
        return getattr(self.object, "__tablename__", type(self.object).__name__.lower())

    def get_id(self) -> str:
        """Return the resource id as a string."""
        value = getattr(self.object, "id", None)
        return "" if value is None else str(value)

    def get_attributes(self, fields: list[str] | None = None) -> dict[str, Any]:
        """Return JSON:API attributes derived from serializer fields."""
        allowed_fields = set(fields) if fields else None
        declared_fields = getattr(self.Meta, "fields", None)
        if declared_fields:
            base_fields = [name for name in declared_fields if name != "id"]
            if allowed_fields is not None:
                base_fields = [name for name in base_fields if name in allowed_fields]
            return {name: getattr(self.object, name) for name in base_fields}
        if hasattr(self.object, "__dict__"):
            excluded = set(self.relationship_fields()) | {"id"}
            attrs = {
                key: value
                for key, value in vars(self.object).items()
                if not key.startswith("_") and key not in excluded
            }
            if allowed_fields is not None:
                attrs = {key: value for key, value in attrs.items() if key in allowed_fields}
            return attrs
        return {}

    def relationship_fields(self) -> dict[str, RelationshipField]:
        """Declared relationships, or the mapped SQLAlchemy relationships when none are declared."""
        if self._declared_relationships:
            return self._declared_relationships
        mapper = inspect(type(self.object), raiseerr=False)
        if mapper is None or not hasattr(mapper, "relationships"):
            return {}
        return {
            relationship.key: self._mapped_field(relationship.key, relationship.uselist)
            for relationship in mapper.relationships
        }

    @staticmethod
    def _mapped_field(key: str, many: bool) -> RelationshipField:
        relationship = RelationshipField(many=many)
        relationship.name = key
        return relationship

    def associations(self, fields: list[str] | None = None) -> list[Association]:
        """Bind every relationship of the instance to the serializer(s) of its target."""
        allowed_fields = set(fields) if fields else None
        associations = []
        for name, relationship in self.relationship_fields().items():
            if allowed_fields is not None and name not in allowed_fields:
                continue
            associations.append(
                Association(
                    name=name,
                    serializer=self._association_serializer(relationship),
                    options={
                        "include_data": relationship.include_data,
                        "virtual_value": relationship.virtual_value,
                    },
                    links=self._association_links(relationship),
                    meta=relationship.meta,
                )
            )
        return associations

    def related_value(self, relationship: RelationshipField) -> Any:
        """Return the loaded value of a relationship, unloaded SQLAlchemy attributes are empty."""
        key = relationship.attribute or relationship.name
        state = inspect(self.object, raiseerr=False)
        if state is not None and key in state.attrs:
            if state.attrs[key].loaded_value is NO_VALUE:
                return [] if relationship.many else None
        value = getattr(self.object, key, None)
        if relationship.many and value is None:
            return []
        return value

    def _association_serializer(self, relationship: RelationshipField) -> Any:
        value = self.related_value(relationship)
        if relationship.many:
            return [self._bind(relationship, item) for item in value]
        return self._bind(relationship, value)

    def _bind(self, relationship: RelationshipField, item: Any) -> JSONAPISerializer:
        serializer_class = self._serializer_class(relationship, item)
        return serializer_class(item, base_url=self.base_url, settings=self.settings)

    def _serializer_class(self, relationship: RelationshipField, item: Any) -> type:
        if isinstance(relationship.serializer, type):
            return relationship.serializer
        if isinstance(relationship.serializer, str):
            name = version_module(self, relationship.serializer, settings=self.settings)
            found = serializer_registry.lookup(name, settings=self.settings)
            if found is None:
                log.debug("No serializer registered as %s", name)
        else:
            found = self.serializer_for(item, settings=self.settings)
        return found or JSONAPISerializer

    def _association_links(self, relationship: RelationshipField) -> dict[str, LinkSpec]:
        if relationship.links is not None:
            return dict(relationship.links)
        if not self.base_url:
            return {}
        resource_path = self.resource_url()
        return {
            "self": f"{resource_path}/relationships/{relationship.name}",
            "related": f"{resource_path}/{relationship.name}",
        }

    def resource_url(self) -> str:
        base = (self.base_url or "").rstrip("/")
        return f"{base}/{self.json_type}/{self.get_id()}"

    def resource_links(self) -> dict[str, str]:
        if not self.base_url:
            return {}
        return {"self": self.resource_url()}
