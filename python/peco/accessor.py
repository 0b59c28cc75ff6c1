"""Positional, named and iterated access to an instance's attributes.

Two surfaces share the same semantics:

- :class:`PecoBase`, a mixin that gives subclasses ``obj[0]``,
  ``obj["name"]``, ``iter(obj)`` and the ``item_*`` helpers;
- :class:`AttributeAccessor`, a wrapper for objects that do not inherit it.

Every operation resolves the catalog of the instance's runtime class.
"""

from __future__ import annotations

from typing import Any, ClassVar, Iterator, Optional, Union

from .catalog import AttributeCatalog
from .descriptor import AttributeDescriptor
from .registry import CatalogRegistry, default_registry

__all__ = ["AttributeAccessor", "PecoBase", "accessor"]

Key = Union[int, str]


def _resolve(catalog: AttributeCatalog, key: Key) -> AttributeDescriptor:
    if isinstance(key, str):
        return catalog.descriptor_by_name(key)
    if isinstance(key, int) and not isinstance(key, bool):
        return catalog.descriptor_at(key)
    raise TypeError(f"attribute key must be int or str, got {type(key).__name__}")


def _iter_values(catalog: AttributeCatalog, instance: Any) -> Iterator[Any]:
    for descriptor in catalog.entries:
        yield descriptor.read(instance)


def _iter_items(catalog: AttributeCatalog, instance: Any) -> Iterator[tuple[str, Any]]:
    for descriptor in catalog.entries:
        yield descriptor.name, descriptor.read(instance)


class PecoBase:
    """Mixin exposing a class's public attributes as an indexable sequence.

    Subclasses keep a zero-argument constructor and declare their attributes
    as annotated fields, properties or ``__slots__``::

        class Cls(PecoBase):
            Id: int = 0
            Name: str = ""

        obj = Cls()
        obj[0] = 1
        obj["Name"] = "aaaa"
        list(obj)  # [1, 'aaaa']

    ``__peco_registry__`` selects the registry used for the class; ``None``
    means the process-wide default.
    """

    __slots__ = ()

    __peco_registry__: ClassVar[Optional[CatalogRegistry]] = None

    def _peco_catalog(self) -> AttributeCatalog:
        registry = type(self).__peco_registry__
        if registry is None:
            registry = default_registry()
        return registry.catalog_for(type(self))

    def __getitem__(self, key: Key) -> Any:
        return _resolve(self._peco_catalog(), key).read(self)

    def __setitem__(self, key: Key, value: Any) -> None:
        _resolve(self._peco_catalog(), key).write(self, value)

    def __iter__(self) -> Iterator[Any]:
        return _iter_values(self._peco_catalog(), self)

    def item_count(self) -> int:
        return self._peco_catalog().count()

    def item_names(self) -> frozenset[str]:
        return self._peco_catalog().names()

    def item_type(self, key: Key) -> Any:
        return _resolve(self._peco_catalog(), key).declared_type

    def item_pairs(self) -> Iterator[tuple[str, Any]]:
        """Lazy ``(name, value)`` pairs in catalog order."""
        return _iter_items(self._peco_catalog(), self)


class AttributeAccessor:
    """Facade over an arbitrary object, bound to the catalog of its class."""

    __slots__ = ("_instance", "_catalog")

    def __init__(self, instance: Any, registry: Optional[CatalogRegistry] = None) -> None:
        if registry is None:
            registry = default_registry()
        self._instance = instance
        self._catalog = registry.catalog_for(type(instance))

    @property
    def instance(self) -> Any:
        return self._instance

    @property
    def catalog(self) -> AttributeCatalog:
        return self._catalog

    def get(self, key: Key) -> Any:
        return _resolve(self._catalog, key).read(self._instance)

    def set(self, key: Key, value: Any) -> None:
        _resolve(self._catalog, key).write(self._instance, value)

    def iterate(self) -> Iterator[Any]:
        return _iter_values(self._catalog, self._instance)

    def items(self) -> Iterator[tuple[str, Any]]:
        return _iter_items(self._catalog, self._instance)

    def item_count(self) -> int:
        return self._catalog.count()

    def item_names(self) -> frozenset[str]:
        return self._catalog.names()

    def item_type(self, key: Key) -> Any:
        return _resolve(self._catalog, key).declared_type

    def position_of(self, name: str) -> int:
        return self._catalog.position_of(name)

    __getitem__ = get
    __setitem__ = set
    __iter__ = iterate
    __len__ = item_count

    def __repr__(self) -> str:
        return f"<AttributeAccessor {type(self._instance).__qualname__}>"


def accessor(instance: Any, registry: Optional[CatalogRegistry] = None) -> AttributeAccessor:
    return AttributeAccessor(instance, registry)
