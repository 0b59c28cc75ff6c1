from __future__ import annotations

from typing import Any


class PecoError(Exception):
    """Base class for catalog and accessor failures."""


class OutOfRangeError(PecoError, IndexError):
    """Raised when a position falls outside ``[0, count)``."""

    def __init__(self, position: int, count: int) -> None:
        super().__init__(f"attribute position {position} out of range (count={count})")
        self.position = position
        self.count = count


class NotFoundError(PecoError, KeyError):
    """Raised when a name is absent from a catalog."""

    def __init__(self, name: str, owner: type | None = None) -> None:
        if owner is None:
            message = f"no attribute named {name!r}"
        else:
            message = f"{owner.__name__} has no attribute named {name!r}"
        super().__init__(message)
        self.name = name
        self.owner = owner

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0])


class TypeMismatchError(PecoError, TypeError):
    """Raised when a value does not fit the declared type of its attribute."""

    def __init__(self, name: str, expected: Any, value: Any) -> None:
        super().__init__(
            f"attribute {name!r} expects {_type_name(expected)}, "
            f"got {type(value).__name__}"
        )
        self.name = name
        self.expected = expected
        self.value = value


class AttributeAccessError(PecoError, AttributeError):
    """Raised on reading a write-only or writing a read-only attribute."""

    def __init__(self, name: str, operation: str) -> None:
        super().__init__(f"attribute {name!r} does not support {operation}")
        self.name = name
        self.operation = operation


class DuplicateAttributeError(PecoError):
    """Raised when a provider describes the same name twice for one class."""

    def __init__(self, name: str, owner: type) -> None:
        super().__init__(
            f"{owner.__name__} declares attribute {name!r} more than once"
        )
        self.name = name
        self.owner = owner


def _type_name(tp: Any) -> str:
    if isinstance(tp, type):
        return tp.__qualname__
    return repr(tp)
