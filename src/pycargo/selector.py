"""Selective subscription.

A selector is a structure of booleans shaped like the state::

    {"counter": True, "profile": {"name": True, "email": False}}

``True`` leaves are selected; ``False`` or missing leaves are not.  The
selected paths are both what a selective subscriber listens on and what
its own ``set`` calls fire, so updates made through a selection only reach
other listeners of those same paths.
"""

from __future__ import annotations

import logging
from typing import Any

from pycargo.exceptions import InvalidSelectorError, UnsupportedOperationError
from pycargo.state.bus import Listener
from pycargo.state.container import StateContainer
from pycargo.state.nodes import NodeKind, node_kind
from pycargo.state.paths import derive_paths

_logger = logging.getLogger(__name__)


def selector_paths(container: StateContainer, selector: Any) -> list[str]:
    """Resolve *selector* against *container* into listener paths.

    *selector* may be the boolean structure itself or a callable that
    receives a copy of the current state and returns it.

    Raises
    ------
    UnsupportedOperationError
        The container holds a primitive value.
    InvalidSelectorError
        The selector (or what the callable returned) is not a structure.
    """
    if container.kind is NodeKind.PRIMITIVE:
        raise UnsupportedOperationError(
            f"selective subscription needs a structured state; container {container.key!r} is primitive"
        )
    resolved = selector(container.get()) if callable(selector) else selector
    if node_kind(resolved) is NodeKind.PRIMITIVE:
        raise InvalidSelectorError(f"selector must be a mapping or list, got {type(resolved).__name__}")
    # Selectors always treat False as "not selected", whatever the container config says.
    return derive_paths(resolved)


class Selection:
    """A container viewed through a selector.

    ``set`` fires only the selected paths, whatever the partial touches.
    """

    def __init__(self, container: StateContainer, selector: Any) -> None:
        self._container = container
        self._paths = tuple(selector_paths(container, selector))
        self._bound: list[Listener] = []

    @property
    def container(self) -> StateContainer:
        return self._container

    @property
    def paths(self) -> tuple[str, ...]:
        return self._paths

    def get(self) -> Any:
        return self._container.get()

    def set(self, update: Any) -> None:
        self._container.set(update, list(self._paths))

    def bind(self, callback: Listener) -> None:
        """Register *callback* on every selected path."""
        self._container.add_listeners(callback, self._paths)
        self._bound.append(callback)
        _logger.debug("Selection on key=%s bound %d path(s)", self._container.key, len(self._paths))

    def close(self) -> None:
        """Unregister every callback this selection bound."""
        for callback in self._bound:
            self._container.remove_listener(callback, self._paths)
        self._bound.clear()

    def __enter__(self) -> Selection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
