"""Per-class catalog cache with exactly-once construction."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .catalog import AttributeCatalog
from .discovery import TypeDescriptorProvider, discover_attributes

__all__ = ["CatalogRegistry", "default_registry"]

logger = logging.getLogger(__name__)


class CatalogRegistry:
    """Builds each class's catalog once and serves it for the registry's lifetime.

    Lookups of an already cached class take no lock. A miss takes a lock
    scoped to that class, so concurrent first requests for the same class
    wait for a single build while other classes build independently. A build
    that raises caches nothing.
    """

    def __init__(self, provider: Optional[TypeDescriptorProvider] = None) -> None:
        self._provider = provider if provider is not None else discover_attributes
        self._catalogs: dict[type, AttributeCatalog] = {}
        self._build_locks: dict[type, threading.Lock] = {}
        self._guard = threading.Lock()

    @property
    def provider(self) -> TypeDescriptorProvider:
        return self._provider

    def catalog_for(self, cls: type) -> AttributeCatalog:
        catalog = self._catalogs.get(cls)
        if catalog is not None:
            return catalog

        with self._guard:
            lock = self._build_locks.get(cls)
            if lock is None:
                lock = threading.Lock()
                self._build_locks[cls] = lock

        try:
            with lock:
                catalog = self._catalogs.get(cls)
                if catalog is None:
                    catalog = AttributeCatalog.build(cls, self._provider)
                    self._catalogs[cls] = catalog
                    logger.debug(
                        "cataloged %s with %d attribute(s)",
                        cls.__qualname__,
                        len(catalog),
                    )
        finally:
            with self._guard:
                if self._build_locks.get(cls) is lock:
                    del self._build_locks[cls]
        return catalog

    def is_cached(self, cls: type) -> bool:
        return cls in self._catalogs

    def cached_types(self) -> list[type]:
        return list(self._catalogs)

    def __contains__(self, cls: object) -> bool:
        return cls in self._catalogs

    def __len__(self) -> int:
        return len(self._catalogs)

    def __repr__(self) -> str:
        return f"<CatalogRegistry {len(self._catalogs)} cached>"


_DEFAULT_REGISTRY: Optional[CatalogRegistry] = None
_DEFAULT_REGISTRY_LOCK = threading.Lock()


def default_registry() -> CatalogRegistry:
    """Process-wide registry, created on first use."""
    global _DEFAULT_REGISTRY
    registry = _DEFAULT_REGISTRY
    if registry is None:
        with _DEFAULT_REGISTRY_LOCK:
            if _DEFAULT_REGISTRY is None:
                _DEFAULT_REGISTRY = CatalogRegistry()
            registry = _DEFAULT_REGISTRY
    return registry
