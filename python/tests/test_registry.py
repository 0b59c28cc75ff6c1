from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator

import pytest

from peco import (
    AttributeDescriptor,
    CatalogRegistry,
    DuplicateAttributeError,
    default_registry,
    discover_attributes,
)


class Cls:
    Id: int = 0
    Name: str = ""


class Other:
    flag: bool = False


class Base:
    x: int = 0


class Shadow(Base):
    x: int = 1


def test_catalog_is_cached(registry: CatalogRegistry) -> None:
    assert not registry.is_cached(Cls)
    first = registry.catalog_for(Cls)
    assert registry.is_cached(Cls)
    assert Cls in registry
    assert registry.catalog_for(Cls) is first
    assert len(registry) == 1
    assert registry.cached_types() == [Cls]


def test_classes_get_separate_catalogs(registry: CatalogRegistry) -> None:
    assert registry.catalog_for(Cls) is not registry.catalog_for(Other)
    assert registry.catalog_for(Other).names() == frozenset({"flag"})


def test_provider_runs_once_per_class() -> None:
    calls: list[type] = []

    def provider(cls: type) -> Iterator[AttributeDescriptor]:
        calls.append(cls)
        return discover_attributes(cls)

    registry = CatalogRegistry(provider)
    for _ in range(3):
        registry.catalog_for(Cls)
    registry.catalog_for(Other)
    assert calls == [Cls, Other]
    assert registry.provider is provider


def test_concurrent_first_requests_build_once() -> None:
    calls: list[type] = []
    barrier = threading.Barrier(8)

    def slow_provider(cls: type) -> Iterator[AttributeDescriptor]:
        calls.append(cls)
        time.sleep(0.05)
        return discover_attributes(cls)

    registry = CatalogRegistry(slow_provider)

    def request():
        barrier.wait()
        return registry.catalog_for(Cls)

    with ThreadPoolExecutor(max_workers=8) as pool:
        catalogs = list(pool.map(lambda _: request(), range(8)))

    assert calls == [Cls]
    assert all(catalog is catalogs[0] for catalog in catalogs)
    assert [d.name for d in catalogs[0]] == ["Id", "Name"]


def _repeating(cls: type) -> Iterator[AttributeDescriptor]:
    yield AttributeDescriptor("x", int, lambda obj: obj.x)
    yield AttributeDescriptor("x", int, lambda obj: obj.x)


def test_failed_build_is_not_cached() -> None:
    registry = CatalogRegistry(_repeating)
    with pytest.raises(DuplicateAttributeError):
        registry.catalog_for(Shadow)
    assert not registry.is_cached(Shadow)
    with pytest.raises(DuplicateAttributeError):
        registry.catalog_for(Shadow)


def test_failed_builds_leave_no_locks_behind() -> None:
    registry = CatalogRegistry(_repeating)
    classes = [type(f"Generated{i}", (Base,), {}) for i in range(50)]
    for cls in classes:
        with pytest.raises(DuplicateAttributeError):
            registry.catalog_for(cls)
    assert registry._build_locks == {}
    assert len(registry) == 0


def test_successful_build_releases_its_lock(registry: CatalogRegistry) -> None:
    registry.catalog_for(Shadow)
    assert Shadow not in registry._build_locks
    assert [d.name for d in registry.catalog_for(Shadow)] == ["x"]


def test_default_registry_is_shared() -> None:
    assert default_registry() is default_registry()
