from __future__ import annotations

import typing
from typing import (
    Annotated,
    Any,
    Literal,
    NewType,
    Optional,
    Protocol,
    TypedDict,
    TypeVar,
    Union,
    runtime_checkable,
)

import pytest

from peco import is_assignable

UserId = NewType("UserId", int)
T = TypeVar("T")


class Animal:
    pass


class Dog(Animal):
    pass


class Named(Protocol):
    name: str


@runtime_checkable
class Closable(Protocol):
    def close(self) -> None: ...


class HasName:
    name = "n"


class Resource:
    def close(self) -> None:
        pass


class Movie(TypedDict):
    title: str


@pytest.mark.parametrize(
    ("value", "declared", "expected"),
    [
        pytest.param(1, int, True, id="int"),
        pytest.param("1", int, False, id="str-for-int"),
        pytest.param(True, int, False, id="bool-for-int"),
        pytest.param(True, bool, True, id="bool"),
        pytest.param(1, float, True, id="int-promotes-to-float"),
        pytest.param(1.5, int, False, id="float-for-int"),
        pytest.param(2.0, complex, True, id="float-promotes-to-complex"),
        pytest.param(False, float, False, id="bool-for-float"),
        pytest.param(Dog(), Animal, True, id="subclass"),
        pytest.param(Animal(), Dog, False, id="superclass"),
        pytest.param(None, Optional[int], True, id="optional-none"),
        pytest.param(3, Optional[int], True, id="optional-value"),
        pytest.param("x", int | None, False, id="pipe-union-miss"),
        pytest.param("x", Union[int, str], True, id="union-hit"),
        pytest.param(None, None, True, id="none"),
        pytest.param(0, type(None), False, id="nonetype"),
        pytest.param("x", Literal["x", "y"], True, id="literal-hit"),
        pytest.param("z", Literal["x", "y"], False, id="literal-miss"),
        pytest.param(1, Literal[True], False, id="literal-type-strict"),
        pytest.param([1, 2], list[int], True, id="generic-origin"),
        pytest.param({}, list[int], False, id="generic-origin-miss"),
        pytest.param({"a": 1}, typing.Dict[str, int], True, id="typing-alias"),
        pytest.param(3, Annotated[int, "meters"], True, id="annotated"),
        pytest.param("3", Annotated[int, "meters"], False, id="annotated-miss"),
        pytest.param(UserId(5), UserId, True, id="newtype"),
        pytest.param("5", UserId, False, id="newtype-miss"),
        pytest.param(object(), Any, True, id="any"),
        pytest.param(object(), object, True, id="object"),
        pytest.param(object(), T, True, id="typevar"),
        pytest.param(1, "Forward", True, id="unresolved-forward-ref"),
        pytest.param(HasName(), Named, True, id="static-protocol"),
        pytest.param(42, Named, True, id="static-protocol-unchecked"),
        pytest.param(HasName(), Optional[Named], True, id="optional-static-protocol"),
        pytest.param(Resource(), Closable, True, id="runtime-protocol"),
        pytest.param(HasName(), Closable, False, id="runtime-protocol-miss"),
        pytest.param({"title": "t"}, Movie, True, id="typeddict"),
        pytest.param({"title": "t"}, Optional[Movie], True, id="optional-typeddict"),
        pytest.param(["t"], Movie, False, id="typeddict-miss"),
    ],
)
def test_is_assignable(value: object, declared: object, expected: bool) -> None:
    assert is_assignable(value, declared) is expected
