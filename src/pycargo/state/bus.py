"""Per-container publish/subscribe keyed by path."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from pycargo.state.nodes import NodeKind, node_kind, thaw

_logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


def _callback_name(callback: Listener) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)


class EventBus:
    """Synchronous path-keyed event dispatch.

    Callbacks under one path run in registration order.  Dispatch is a
    plain function call, so a callback that triggers another emit runs that
    emit to completion before the remaining callbacks of the outer one.
    """

    def __init__(self, *, isolate_errors: bool = False) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._isolate_errors = isolate_errors

    def on(self, path: str, callback: Listener) -> None:
        self._listeners.setdefault(path, []).append(callback)
        _logger.debug("Listener %s registered on path=%s", _callback_name(callback), path)

    def off(self, path: str, callback: Listener) -> bool:
        """Remove one registration of *callback* under *path*.

        Returns ``True`` when something was removed.
        """
        callbacks = self._listeners.get(path)
        if not callbacks:
            return False
        for index, candidate in enumerate(callbacks):
            if candidate is callback:
                del callbacks[index]
                break
        else:
            return False
        if not callbacks:
            self._listeners.pop(path, None)
        return True

    def remove_all(self, path: str) -> None:
        removed = self._listeners.pop(path, None)
        if removed:
            _logger.debug("Removed %d listener(s) from path=%s", len(removed), path)

    def listener_count(self, path: str | None = None) -> int:
        if path is not None:
            return len(self._listeners.get(path, ()))
        return sum(len(callbacks) for callbacks in self._listeners.values())

    def paths(self) -> list[str]:
        return list(self._listeners)

    def emit(
        self,
        paths: Iterable[str],
        state: Any,
        *,
        current: Callable[[], Any] | None = None,
    ) -> int:
        """Invoke the callbacks of every path in *paths* with *state*.

        Each callback gets its own deep copy of a structured state, so no
        listener can reach the container's tree or another listener's copy.
        When *current* is given it is read before every callback instead of
        using *state*, so listeners that run after a nested update see that
        update rather than a stale value.
        Returns the number of callbacks invoked.
        """
        notified = 0
        for path in paths:
            # Snapshot: callbacks may (un)register while we iterate.
            for callback in list(self._listeners.get(path, ())):
                value = current() if current is not None else state
                payload = thaw(value) if node_kind(value) is not NodeKind.PRIMITIVE else value
                notified += 1
                if not self._isolate_errors:
                    callback(payload)
                    continue
                try:
                    callback(payload)
                except Exception:
                    _logger.exception("Listener %s failed for path=%s", _callback_name(callback), path)
        return notified
