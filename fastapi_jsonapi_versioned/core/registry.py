"""Registry of serializer classes keyed by their qualified name."""

from __future__ import annotations

from typing import Any

from fastapi_jsonapi_versioned.config import JSONAPISettings, log, resolve_settings
from fastapi_jsonapi_versioned.core.versioning import qualified_name, version_module


class SerializerRegistry:
    """Map qualified serializer names to serializer classes.

    Classes are stored under their full qualified name (``API.V1.PostSerializer``).
    Lookups use versioned names (``V1.PostSerializer``), computed for the isolated
    namespace in effect when the lookup happens.
    """

    def __init__(self) -> None:
        self._serializers: dict[str, type] = {}
        self._versioned: dict[str | None, dict[str, type]] = {}

    def register(self, serializer_class: type, name: str | None = None) -> type:
        """Register ``serializer_class`` (usable as a class decorator)."""
        key = name or qualified_name(serializer_class)
        current = self._serializers.get(key)
        if current is not None and current is not serializer_class:
            log.warning("Replacing serializer %s registered as %s", current, key)
        self._serializers[key] = serializer_class
        self._versioned.clear()
        log.debug("Registered serializer %s", key)
        return serializer_class

    def unregister(self, serializer_class: type) -> None:
        for key, value in list(self._serializers.items()):
            if value is serializer_class:
                del self._serializers[key]
        self._versioned.clear()

    def clear(self) -> None:
        self._serializers.clear()
        self._versioned.clear()

    def lookup(self, name: str, *, settings: JSONAPISettings | None = None) -> type | None:
        """Return the serializer registered under the versioned ``name``, if any."""
        settings = resolve_settings(settings)
        index = self._versioned.get(settings.isolated_namespace)
        if index is None:
            index = {
                version_module(key, key.rsplit(".", 1)[-1], settings=settings): value
                for key, value in self._serializers.items()
            }
            self._versioned[settings.isolated_namespace] = index
        return index.get(name)

    def __contains__(self, item: Any) -> bool:
        return item in self._serializers.values()

    def __len__(self) -> int:
        return len(self._serializers)


serializer_registry = SerializerRegistry()
