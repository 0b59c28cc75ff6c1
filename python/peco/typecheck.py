"""Runtime compatibility between a value and a declared annotation."""

from __future__ import annotations

import types
import typing
from typing import Any

_NONE_TYPES = (None, type(None))

# int may stand in for float, int and float for complex.
_PROMOTIONS: dict[type, tuple[type, ...]] = {
    float: (int,),
    complex: (int, float),
}


def is_assignable(value: Any, declared: Any) -> bool:
    """Return True if ``value`` may be stored in an attribute typed ``declared``.

    Parameterized generics are checked against their origin only; element
    types are not inspected.
    """
    if declared is Any or declared is object:
        return True
    if declared in _NONE_TYPES:
        return value is None
    if isinstance(declared, typing.TypeVar):
        return True
    if isinstance(declared, str):
        # Unresolved forward reference.
        return True

    supertype = getattr(declared, "__supertype__", None)
    if supertype is not None:
        return is_assignable(value, supertype)

    origin = typing.get_origin(declared)
    if origin is typing.Union or origin is types.UnionType:
        return any(is_assignable(value, arg) for arg in typing.get_args(declared))
    if origin is typing.Literal:
        return any(
            value == literal and type(value) is type(literal)
            for literal in typing.get_args(declared)
        )
    if origin is typing.Annotated:
        return is_assignable(value, typing.get_args(declared)[0])
    if origin is not None:
        declared = origin

    if not isinstance(declared, type):
        return True
    if typing.is_typeddict(declared):
        declared = dict
    elif getattr(declared, "_is_protocol", False) and not getattr(
        declared, "_is_runtime_protocol", False
    ):
        # Structural only; isinstance() is not allowed.
        return True

    if isinstance(value, bool) and declared in (int, float, complex):
        return False
    if isinstance(value, declared):
        return True
    return isinstance(value, _PROMOTIONS.get(declared, ()))
