"""Namespaced and versioned naming helpers.

Names are dotted, e.g. a controller class declared with
``jsonapi_namespace = "API.V1"`` has the qualified name
``API.V1.OrdersController`` and the namespace ``API.V1``. With the isolated
namespace ``API`` configured, its version namespace is ``V1``::

    >>> namespaced_module(OrdersController, "OrdersSerializer")
    'API.V1.OrdersSerializer'
    >>> version_module(OrdersController, "OrdersSerializer")
    'V1.OrdersSerializer'
    >>> version_path(OrdersController, "orders")
    'v1/orders'
"""

from __future__ import annotations

from typing import Any

from fastapi_jsonapi_versioned.config import JSONAPISettings, resolve_settings

SEPARATOR = "."


def qualified_name(target: Any) -> str:
    """Return the fully qualified name of a class, an instance or a name string."""
    if isinstance(target, str):
        return target
    cls = target if isinstance(target, type) else type(target)
    namespace = getattr(cls, "jsonapi_namespace", None)
    if namespace:
        return f"{namespace}{SEPARATOR}{cls.__name__}"
    return f"{cls.__module__}{SEPARATOR}{cls.__qualname__}"


def namespace_of(target: Any) -> str:
    """Return the enclosing namespace of ``target`` ("" for top level names)."""
    name = qualified_name(target)
    if SEPARATOR not in name:
        return ""
    return name.rsplit(SEPARATOR, 1)[0]


def _join(module: str, suffix: str | None, joiner: str) -> str:
    segments = [segment for segment in module.lower().split(SEPARATOR) if segment]
    if suffix is not None:
        segments.append(suffix)
    return joiner.join(segments)


def _strip_segment(name: str, segment: str) -> str:
    """Remove the first ``segment.`` occurrence, matching whole segments only.

    ``segment`` may span several segments (``Shop.API``), the run is matched as
    a whole and must be followed by another segment.
    """
    parts = name.split(SEPARATOR)
    token = segment.split(SEPARATOR)
    width = len(token)
    for start in range(len(parts) - width):
        if parts[start:start + width] == token:
            del parts[start:start + width]
            break
    return SEPARATOR.join(parts)


def namespaced_module(target: Any, suffix: str | None = None) -> str:
    """Return ``suffix`` prefixed with the namespace of ``target``.

    :param target: class, instance or qualified name string
    :param suffix: name in this namespace's module space, ``None`` for the namespace itself
    :return: namespaced module name, ``suffix`` is not prefixed twice
    """
    module = namespace_of(target)
    if suffix is None:
        return module
    if not module or suffix.startswith(f"{module}{SEPARATOR}"):
        return suffix
    return f"{module}{SEPARATOR}{suffix}"


def namespaced_path(target: Any, suffix: str | None = None) -> str:
    """Namespaced url path, e.g. ``api/v1/orders``."""
    return _join(namespaced_module(target), suffix, "/")


def namespaced_name(target: Any, suffix: str | None = None) -> str:
    """Namespaced route name, e.g. ``api_v1_orders``."""
    return _join(namespaced_module(target), suffix, "_")


def namespaced_dot_path(target: Any, suffix: str | None = None) -> str:
    """Namespaced translation key, e.g. ``api.v1.orders``."""
    return _join(namespaced_module(target), suffix, ".")


def unnamespace(target: Any, value: str) -> str:
    """Strip every namespaced prefix form (module, path, name, dot path) from ``value``."""
    for prefix in (
        namespaced_module(target, ""),
        namespaced_path(target, ""),
        namespaced_name(target, ""),
        namespaced_dot_path(target, ""),
    ):
        if prefix:
            value = value.replace(prefix, "")
    return value


def version_module(
    target: Any, suffix: str | None = None, *, settings: JSONAPISettings | None = None
) -> str:
    """Like :func:`namespaced_module` without the isolated namespace segment."""
    name = namespaced_module(target, suffix)
    isolated = resolve_settings(settings).isolated_namespace
    if isolated:
        name = _strip_segment(name, isolated)
    return name


def version_path(
    target: Any, suffix: str | None = None, *, settings: JSONAPISettings | None = None
) -> str:
    """Versioned url path, e.g. ``v1/orders``."""
    return _join(version_module(target, settings=settings), suffix, "/")


def version_name(
    target: Any, suffix: str | None = None, *, settings: JSONAPISettings | None = None
) -> str:
    """Versioned route name, e.g. ``v1_orders``."""
    return _join(version_module(target, settings=settings), suffix, "_")


def version_dot_path(
    target: Any, suffix: str | None = None, *, settings: JSONAPISettings | None = None
) -> str:
    """Versioned translation key, e.g. ``v1.orders``."""
    return _join(version_module(target, settings=settings), suffix, ".")


def unversion(target: Any, value: str, *, settings: JSONAPISettings | None = None) -> str:
    """Strip every versioned prefix form from ``value``."""
    for prefix in (
        version_module(target, "", settings=settings),
        version_path(target, "", settings=settings),
        version_name(target, "", settings=settings),
        version_dot_path(target, "", settings=settings),
    ):
        if prefix:
            value = value.replace(prefix, "")
    return value


class Versioning:
    """Expose the naming helpers as class-bound methods.

    Subclasses set ``jsonapi_namespace`` to pin their namespace independently
    of the python module they live in.
    """

    jsonapi_namespace: str | None = None

    @classmethod
    def namespaced_module(cls, suffix: str | None = None) -> str:
        return namespaced_module(cls, suffix)

    @classmethod
    def namespaced_path(cls, suffix: str | None = None) -> str:
        return namespaced_path(cls, suffix)

    @classmethod
    def namespaced_name(cls, suffix: str | None = None) -> str:
        return namespaced_name(cls, suffix)

    @classmethod
    def namespaced_dot_path(cls, suffix: str | None = None) -> str:
        return namespaced_dot_path(cls, suffix)

    @classmethod
    def unnamespace(cls, value: str) -> str:
        return unnamespace(cls, value)

    @classmethod
    def version_module(cls, suffix: str | None = None, **kwargs: Any) -> str:
        return version_module(cls, suffix, **kwargs)

    @classmethod
    def version_path(cls, suffix: str | None = None, **kwargs: Any) -> str:
        return version_path(cls, suffix, **kwargs)

    @classmethod
    def version_name(cls, suffix: str | None = None, **kwargs: Any) -> str:
        return version_name(cls, suffix, **kwargs)

    @classmethod
    def version_dot_path(cls, suffix: str | None = None, **kwargs: Any) -> str:
        return version_dot_path(cls, suffix, **kwargs)

    @classmethod
    def unversion(cls, value: str, **kwargs: Any) -> str:
        return unversion(cls, value, **kwargs)
