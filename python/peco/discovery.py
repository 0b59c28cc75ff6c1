"""Default type descriptor provider.

A provider is any callable taking a class and returning its attributes as an
iterable of :class:`AttributeDescriptor`. The default walks the MRO from the
most basic class down and describes, per class and in this order:

- public annotated instance fields (declaration order),
- public properties that were not annotated,
- public ``__slots__`` members that were not annotated.

A subclass that redeclares a base attribute (an overriding property or a
re-annotated field) replaces the base descriptor at the base's position, the
way dataclasses merge inherited fields.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import operator
import sys
import types
import typing
from typing import Any, Callable, Iterable, Iterator

from .descriptor import AttributeDescriptor

logger = logging.getLogger(__name__)

TypeDescriptorProvider = Callable[[type], Iterable[AttributeDescriptor]]

_MEMBER_DESCRIPTOR = types.MemberDescriptorType
_REQUIRED_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)
_CLASS_LEVEL_PREFIXES = ("ClassVar", "typing.ClassVar", "InitVar", "dataclasses.InitVar")


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _is_class_level(hint: Any) -> bool:
    if isinstance(hint, str):
        stripped = hint.replace(" ", "")
        return stripped.startswith(_CLASS_LEVEL_PREFIXES)
    if hint is typing.ClassVar or typing.get_origin(hint) is typing.ClassVar:
        return True
    return hint is dataclasses.InitVar or isinstance(hint, dataclasses.InitVar)


def _own_annotations(klass: type) -> dict[str, Any]:
    try:
        return dict(inspect.get_annotations(klass))
    except NameError:
        # Lazily evaluated annotations (3.14+) naming something undefined.
        import annotationlib

        return dict(
            annotationlib.get_annotations(
                klass, format=annotationlib.Format.FORWARDREF
            )
        )


def _resolve_one(klass: type, name: str, annotation: Any) -> Any:
    if isinstance(annotation, typing.ForwardRef):
        annotation = annotation.__forward_arg__
    if not isinstance(annotation, str):
        return annotation
    module = sys.modules.get(klass.__module__)
    globalns = dict(getattr(module, "__dict__", {}))
    try:
        return eval(annotation, globalns, dict(vars(klass)))
    except (NameError, AttributeError, TypeError, SyntaxError) as exc:
        logger.debug(
            "could not resolve annotation %s.%s (%s); treating it as Any",
            klass.__qualname__,
            name,
            exc,
        )
        return annotation


def _resolve_hints(klass: type) -> dict[str, Any]:
    raw = _own_annotations(klass)
    if not raw:
        return {}
    try:
        resolved = typing.get_type_hints(klass, include_extras=True)
    except (NameError, TypeError, SyntaxError) as exc:
        logger.debug(
            "could not resolve annotations of %s together (%s); resolving one by one",
            klass.__qualname__,
            exc,
        )
        resolved = {
            name: _resolve_one(klass, name, annotation)
            for name, annotation in raw.items()
        }
    hints: dict[str, Any] = {}
    for name, annotation in raw.items():
        # Unresolved strings are kept so ClassVar/InitVar can still be recognised.
        hints[name] = resolved.get(name, annotation)
    return hints


def _declared_type(hint: Any) -> Any:
    if isinstance(hint, (str, typing.ForwardRef)):
        return Any
    return hint


def _is_parameterized(fget: Callable[..., Any]) -> bool:
    try:
        params = list(inspect.signature(fget).parameters.values())
    except (TypeError, ValueError):
        return False
    for param in params[1:]:
        if param.kind in _REQUIRED_KINDS and param.default is inspect.Parameter.empty:
            return True
    return False


def _property_type(prop: property) -> Any:
    fget = getattr(prop, "fget", None)
    fset = getattr(prop, "fset", None)
    try:
        if fget is not None:
            hints = typing.get_type_hints(fget, include_extras=True)
            if "return" in hints:
                return hints["return"]
        if fset is not None:
            hints = typing.get_type_hints(fset, include_extras=True)
            hints.pop("return", None)
            if len(hints) == 1:
                return next(iter(hints.values()))
    except (NameError, TypeError, SyntaxError) as exc:
        logger.debug("could not resolve property annotations (%s)", exc)
    return Any


def _field_accessors(name: str, member: Any):
    if isinstance(member, _MEMBER_DESCRIPTOR):
        return member.__get__, member.__set__

    def setter(obj, value):
        setattr(obj, name, value)

    return operator.attrgetter(name), setter


def _property_accessors(prop: Any):
    if type(prop) is property:
        return prop.fget, prop.fset
    getter = prop.__get__ if prop.fget is not None else None
    setter = prop.__set__ if prop.fset is not None else None
    return getter, setter


def _describe_property(name: str, prop: Any, declared: Any = None):
    fget = getattr(prop, "fget", None)
    if fget is not None and _is_parameterized(fget):
        return None
    getter, setter = _property_accessors(prop)
    if declared is None:
        declared = _property_type(prop)
    return AttributeDescriptor(name, declared, getter, setter, kind="property")


def _slot_names(klass: type) -> list[str]:
    slots = klass.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        return [slots]
    return list(slots)


def _describe_class(klass: type) -> Iterator[AttributeDescriptor]:
    namespace = klass.__dict__
    seen: set[str] = set()

    for name, hint in _resolve_hints(klass).items():
        if not _is_public(name) or _is_class_level(hint):
            continue
        seen.add(name)
        member = namespace.get(name)
        if isinstance(member, property):
            descriptor = _describe_property(name, member, _declared_type(hint))
            if descriptor is not None:
                yield descriptor
            continue
        getter, setter = _field_accessors(name, member)
        yield AttributeDescriptor(name, _declared_type(hint), getter, setter)

    for name, member in namespace.items():
        if name in seen or not _is_public(name) or not isinstance(member, property):
            continue
        seen.add(name)
        descriptor = _describe_property(name, member)
        if descriptor is not None:
            yield descriptor

    for name in _slot_names(klass):
        if name in seen or not _is_public(name):
            continue
        member = namespace.get(name)
        if not isinstance(member, _MEMBER_DESCRIPTOR):
            continue
        seen.add(name)
        yield AttributeDescriptor(name, Any, member.__get__, member.__set__, kind="slot")


def discover_attributes(cls: type) -> Iterator[AttributeDescriptor]:
    """Describe the public, instance-level, parameterless attributes of ``cls``."""
    if not isinstance(cls, type):
        raise TypeError(f"expected a class, got {type(cls).__name__}")
    merged: dict[str, AttributeDescriptor] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for descriptor in _describe_class(klass):
            # Reassigning an existing key keeps its original position.
            merged[descriptor.name] = descriptor
    yield from merged.values()
