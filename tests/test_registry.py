from __future__ import annotations

import pytest

from pycargo.config import CargoConfig
from pycargo.exceptions import ContainerNotFoundError, DuplicateKeyError, InvalidKeyError
from pycargo.registry import ContainerRegistry, create_container


def test_create_container_builds_independent_containers() -> None:
    first = create_container("counter", 0)
    second = create_container("counter", 0)

    first.set(1)

    assert first is not second
    assert second.get() == 0


def test_create_container_requires_key() -> None:
    with pytest.raises(InvalidKeyError):
        create_container("", {"a": 1})
    with pytest.raises(InvalidKeyError):
        create_container("   ", {"a": 1})


def test_registry_rejects_duplicate_keys() -> None:
    registry = ContainerRegistry()
    registry.create("todos", {"items": []})

    with pytest.raises(DuplicateKeyError) as exc_info:
        registry.create("todos", {"items": [1]})

    assert exc_info.value.key == "todos"
    assert registry.get("todos").get() == {"items": []}


def test_registries_are_isolated() -> None:
    left = ContainerRegistry()
    right = ContainerRegistry()

    left.create("shared", 1)
    right.create("shared", 2)

    assert left.get("shared").get() == 1
    assert right.get("shared").get() == 2


def test_registry_lookup_and_membership() -> None:
    registry = ContainerRegistry()
    counter = registry.create("counter", 0)
    registry.create("name", "")

    assert "counter" in registry
    assert "missing" not in registry
    assert len(registry) == 2
    assert registry.keys() == ["counter", "name"]
    assert list(registry) == ["counter", "name"]
    assert [container.key for container in registry.values()] == ["counter", "name"]
    assert registry.get("counter") is counter


def test_registry_missing_key() -> None:
    registry = ContainerRegistry()

    with pytest.raises(ContainerNotFoundError) as exc_info:
        registry.get("nope")
    assert isinstance(exc_info.value, KeyError)
    assert str(exc_info.value) == "no container with key 'nope'"


def test_registry_remove_frees_key() -> None:
    registry = ContainerRegistry()
    original = registry.create("counter", 0)

    assert registry.remove("counter") is original
    assert "counter" not in registry
    assert registry.create("counter", 5).get() == 5


def test_registry_config_is_default_for_created_containers() -> None:
    config = CargoConfig(max_dispatch_depth=4)
    registry = ContainerRegistry(config=config)

    assert registry.create("a", 0).config is config
    override = CargoConfig()
    assert registry.create("b", 0, config=override).config is override
