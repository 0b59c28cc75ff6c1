from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from .descriptor import AttributeDescriptor
from .discovery import TypeDescriptorProvider, discover_attributes
from .errors import DuplicateAttributeError, NotFoundError, OutOfRangeError


def _check_position(position: object) -> int:
    if isinstance(position, bool) or not isinstance(position, int):
        raise TypeError(
            f"attribute position must be int, got {type(position).__name__}"
        )
    return position


class AttributeCatalog:
    """Ordered, name-indexed attribute descriptors of one class.

    Read-only once built. Use :meth:`build` (or a registry) rather than the
    constructor directly.
    """

    __slots__ = ("owner", "entries", "name_index")

    def __init__(
        self,
        owner: type,
        entries: tuple[AttributeDescriptor, ...],
        name_index: Mapping[str, int],
    ) -> None:
        self.owner = owner
        self.entries = entries
        self.name_index = name_index

    @classmethod
    def build(
        cls, owner: type, provider: Optional[TypeDescriptorProvider] = None
    ) -> "AttributeCatalog":
        if provider is None:
            provider = discover_attributes
        entries: list[AttributeDescriptor] = []
        index: dict[str, int] = {}
        for descriptor in provider(owner):
            if descriptor.name in index:
                raise DuplicateAttributeError(descriptor.name, owner)
            index[descriptor.name] = len(entries)
            entries.append(descriptor)
        return cls(owner, tuple(entries), MappingProxyType(index))

    def descriptor_at(self, position: int) -> AttributeDescriptor:
        position = _check_position(position)
        if position < 0 or position >= len(self.entries):
            raise OutOfRangeError(position, len(self.entries))
        return self.entries[position]

    def descriptor_by_name(self, name: str) -> AttributeDescriptor:
        return self.entries[self.position_of(name)]

    def position_of(self, name: str) -> int:
        try:
            return self.name_index[name]
        except KeyError:
            raise NotFoundError(name, self.owner) from None

    def count(self) -> int:
        return len(self.entries)

    def names(self) -> frozenset[str]:
        """All cataloged names; no ordering is implied."""
        return frozenset(self.name_index)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[AttributeDescriptor]:
        return iter(self.entries)

    def __contains__(self, name: object) -> bool:
        return name in self.name_index

    def __repr__(self) -> str:
        names = ", ".join(d.name for d in self.entries)
        return f"<AttributeCatalog {self.owner.__qualname__} [{names}]>"
