"""State container: one value, its default snapshot, and its listeners."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from pycargo._redact import preview_for_log
from pycargo.config import CargoConfig
from pycargo.exceptions import DispatchDepthError, InvalidKeyError, ShapeMismatchError
from pycargo.state.bus import EventBus, Listener
from pycargo.state.events import DispatchEvent, DispatchOrigin
from pycargo.state.merge import merge
from pycargo.state.nodes import NodeKind, node_kind, thaw
from pycargo.state.paths import derive_paths

_logger = logging.getLogger(__name__)

DispatchHook = Callable[[DispatchEvent], None]


class StateContainer:
    """Holds one state value and notifies listeners by path.

    Usage::

        todos = StateContainer("todos", {"filter": "all", "items": []})
        todos.add_listeners(render, ["filter"])
        todos.set({"filter": "done"})      # render() is called
        todos.set({"items": {0: "milk"}})  # render() is not

    The shape of the state is fixed at construction: ``listeners`` lists
    every leaf path of the initial value and is never recomputed, and
    partial updates cannot introduce new object keys.

    ``set`` and ``reset`` dispatch synchronously.  A listener that calls
    ``set`` on the same container runs a complete nested cycle before the
    outer dispatch continues; ``CargoConfig.max_dispatch_depth`` bounds how
    deep that may go.
    """

    def __init__(
        self,
        key: str,
        initial_state: Any,
        *,
        config: CargoConfig | None = None,
        on_dispatch: DispatchHook | None = None,
    ) -> None:
        if not isinstance(key, str) or not key.strip():
            raise InvalidKeyError(f"container key must be a non-empty string, got {key!r}")
        self._key = key
        self._config = config or CargoConfig()
        self._state = thaw(initial_state)
        self._default = thaw(initial_state)
        self._kind = node_kind(self._default)
        derived = derive_paths(self._default, skip_false=not self._config.settable_false_leaves)
        self._listeners: tuple[str, ...] = tuple(derived) if derived else (key,)
        self._bus = EventBus(isolate_errors=self._config.isolate_callback_errors)
        self._on_dispatch = on_dispatch
        self._depth = 0
        _logger.debug(
            "Created container key=%s kind=%s listeners=%d",
            key,
            self._kind,
            len(self._listeners),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self._key!r}, kind={self.kind.value})"

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def key(self) -> str:
        return self._key

    @property
    def kind(self) -> NodeKind:
        """Kind of the initial state; fixed for the container's lifetime."""
        return self._kind

    @property
    def listeners(self) -> tuple[str, ...]:
        """Every path derivable from the initial state, or ``(key,)``."""
        return self._listeners

    @property
    def default(self) -> Any:
        """A fresh copy of the construction-time state."""
        return thaw(self._default)

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def config(self) -> CargoConfig:
        return self._config

    @property
    def dispatch_depth(self) -> int:
        """Number of ``set``/``reset`` calls currently in progress."""
        return self._depth

    def get(self) -> Any:
        """Return an independent copy of the current state."""
        return thaw(self._state)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def set(self, update: Any, listeners: Sequence[str] | None = None) -> None:
        """Apply a partial update and notify the affected paths.

        Parameters
        ----------
        update
            A partial of the state, or a callable that receives a copy of
            the current state and returns the partial.  Primitive states are
            replaced wholesale.
        listeners
            Paths to fire instead of the ones derived from the partial.
            Selective subscribers pass their own paths here.

        Raises
        ------
        ShapeMismatchError
            The partial does not fit the state's shape, including a mapping
            or list set on a primitive container.  State is unchanged.
        DispatchDepthError
            Nested dispatch exceeded ``max_dispatch_depth``.
        """
        self._enter()
        try:
            partial = update(thaw(self._state)) if callable(update) else update

            structured = self._kind is not NodeKind.PRIMITIVE
            if structured:
                next_state = merge(
                    self._state,
                    thaw(self._state),
                    partial,
                    settable_false=self._config.settable_false_leaves,
                )
            elif node_kind(partial) is not NodeKind.PRIMITIVE:
                raise ShapeMismatchError(
                    f"container {self._key!r} holds a primitive; got {type(partial).__name__}"
                )
            else:
                next_state = thaw(partial)
            self._state = next_state

            explicit = bool(listeners)
            if explicit:
                paths = list(listeners or ())
            elif structured:
                paths = derive_paths(partial, skip_false=not self._config.settable_false_leaves)
            else:
                paths = list(self._listeners)

            if self._config.log_payloads:
                _logger.debug(
                    "set key=%s depth=%d partial=%s",
                    self._key,
                    self._depth,
                    preview_for_log(partial, max_string=self._config.log_max_string),
                )
            self._dispatch(DispatchOrigin.SET, paths, explicit=explicit)
        finally:
            self._depth -= 1

    def reset(self) -> None:
        """Restore the default state and notify every path of the container."""
        self._enter()
        try:
            self._state = thaw(self._default)
            paths = list(dict.fromkeys((self._key, *self._listeners)))
            self._dispatch(DispatchOrigin.RESET, paths, explicit=False)
        finally:
            self._depth -= 1

    def _enter(self) -> None:
        limit = self._config.max_dispatch_depth
        if limit and self._depth >= limit:
            raise DispatchDepthError(
                f"dispatch depth limit {limit} exceeded for container {self._key!r}",
                key=self._key,
                depth=self._depth + 1,
            )
        self._depth += 1

    def _dispatch(self, origin: DispatchOrigin, paths: list[str], *, explicit: bool) -> None:
        _logger.debug(
            "%s key=%s paths=%d depth=%d",
            origin.value,
            self._key,
            len(paths),
            self._depth,
        )
        notified = self._bus.emit(paths, self._state, current=lambda: self._state)
        if self._on_dispatch is not None:
            self._on_dispatch(
                DispatchEvent(
                    key=self._key,
                    origin=origin,
                    paths=tuple(paths),
                    depth=self._depth,
                    notified=notified,
                    explicit=explicit,
                )
            )

    # ------------------------------------------------------------------
    # Listener registration
    # ------------------------------------------------------------------

    def add_listeners(self, callback: Listener, paths: Iterable[str]) -> None:
        for path in paths:
            self._bus.on(path, callback)

    def unsubscribe(self, paths: Iterable[str]) -> None:
        """Drop every callback registered under each of *paths*."""
        for path in paths:
            self._bus.remove_all(path)

    def remove_listener(self, callback: Listener, paths: Iterable[str]) -> None:
        """Drop only *callback* from each of *paths*."""
        for path in paths:
            self._bus.off(path, callback)
