from __future__ import annotations

from .accessor import AttributeAccessor, PecoBase, accessor
from .catalog import AttributeCatalog
from .descriptor import AttributeDescriptor
from .discovery import TypeDescriptorProvider, discover_attributes
from .errors import (
    AttributeAccessError,
    DuplicateAttributeError,
    NotFoundError,
    OutOfRangeError,
    PecoError,
    TypeMismatchError,
)
from .registry import CatalogRegistry, default_registry
from .typecheck import is_assignable


def _resolve_version() -> str:
    try:
        from importlib.metadata import version

        return version("peco")
    except Exception:  # pragma: no cover - during development
        return "0.0.0"


def __getattr__(name: str):
    if name == "__version__":
        value = _resolve_version()
        globals()["__version__"] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["__version__"])


__all__ = [
    "AttributeAccessError",
    "AttributeAccessor",
    "AttributeCatalog",
    "AttributeDescriptor",
    "CatalogRegistry",
    "DuplicateAttributeError",
    "NotFoundError",
    "OutOfRangeError",
    "PecoBase",
    "PecoError",
    "TypeDescriptorProvider",
    "TypeMismatchError",
    "accessor",
    "default_registry",
    "discover_attributes",
    "is_assignable",
    "__version__",
]
