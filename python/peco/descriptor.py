from __future__ import annotations

from typing import Any, Callable, Optional

from .errors import AttributeAccessError, TypeMismatchError
from .typecheck import is_assignable

Getter = Callable[[Any], Any]
Setter = Callable[[Any, Any], None]


class AttributeDescriptor:
    """Metadata and bound accessors for one cataloged attribute.

    ``getter`` and ``setter`` are resolved once at discovery time and called
    directly afterwards, so reads and writes skip the generic attribute lookup.
    """

    __slots__ = ("name", "declared_type", "getter", "setter", "kind")

    def __init__(
        self,
        name: str,
        declared_type: Any = Any,
        getter: Optional[Getter] = None,
        setter: Optional[Setter] = None,
        kind: str = "field",
    ) -> None:
        self.name = name
        self.declared_type = declared_type
        self.getter = getter
        self.setter = setter
        self.kind = kind

    @property
    def readable(self) -> bool:
        return self.getter is not None

    @property
    def writable(self) -> bool:
        return self.setter is not None

    def accepts(self, value: Any) -> bool:
        return is_assignable(value, self.declared_type)

    def read(self, instance: Any) -> Any:
        getter = self.getter
        if getter is None:
            raise AttributeAccessError(self.name, "get")
        return getter(instance)

    def write(self, instance: Any, value: Any) -> None:
        setter = self.setter
        if setter is None:
            raise AttributeAccessError(self.name, "set")
        if not is_assignable(value, self.declared_type):
            raise TypeMismatchError(self.name, self.declared_type, value)
        setter(instance, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeDescriptor):
            return NotImplemented
        return (
            self.name == other.name
            and self.declared_type == other.declared_type
            and self.kind == other.kind
        )

    def __hash__(self) -> int:
        return hash((self.name, self.kind))

    def __repr__(self) -> str:
        declared = self.declared_type
        type_name = declared.__qualname__ if isinstance(declared, type) else repr(declared)
        return f"<AttributeDescriptor {self.name}: {type_name} ({self.kind})>"
