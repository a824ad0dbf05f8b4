"""Container construction and keyed lookup.

There is no process-wide store.  Applications that want key uniqueness
create a :class:`ContainerRegistry` at their composition root and pass it
around; tests build their own.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from pycargo.config import CargoConfig
from pycargo.exceptions import ContainerNotFoundError, DuplicateKeyError
from pycargo.state.container import DispatchHook, StateContainer

_logger = logging.getLogger(__name__)


def create_container(
    key: str,
    initial_state: Any,
    *,
    config: CargoConfig | None = None,
    on_dispatch: DispatchHook | None = None,
) -> StateContainer:
    """Build a container.

    ``key`` must be a non-empty string (``InvalidKeyError`` otherwise).
    Uniqueness is not checked here; see :class:`ContainerRegistry`.
    """
    return StateContainer(key, initial_state, config=config, on_dispatch=on_dispatch)


class ContainerRegistry:
    """Owns containers by key and refuses duplicates."""

    def __init__(self, *, config: CargoConfig | None = None) -> None:
        self._config = config
        self._containers: dict[str, StateContainer] = {}

    def create(
        self,
        key: str,
        initial_state: Any,
        *,
        config: CargoConfig | None = None,
        on_dispatch: DispatchHook | None = None,
    ) -> StateContainer:
        if key in self._containers:
            raise DuplicateKeyError(f"a container with key {key!r} already exists", key=key)
        container = create_container(
            key,
            initial_state,
            config=config or self._config,
            on_dispatch=on_dispatch,
        )
        self._containers[key] = container
        _logger.debug("Registered container key=%s (total=%d)", key, len(self._containers))
        return container

    def get(self, key: str) -> StateContainer:
        container = self._containers.get(key)
        if container is None:
            raise ContainerNotFoundError(f"no container with key {key!r}", key=key)
        return container

    def remove(self, key: str) -> StateContainer:
        """Forget *key*; its listeners stay attached to the returned container."""
        container = self.get(key)
        del self._containers[key]
        _logger.debug("Removed container key=%s", key)
        return container

    def keys(self) -> list[str]:
        return list(self._containers)

    def __contains__(self, key: object) -> bool:
        return key in self._containers

    def __len__(self) -> int:
        return len(self._containers)

    def values(self) -> list[StateContainer]:
        return list(self._containers.values())

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._containers))
