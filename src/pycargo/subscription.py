"""Framework-neutral subscription handle.

UI bindings open a subscription when a component mounts and close it when
it unmounts.  Closing removes only this subscription's callback, so other
subscribers on the same paths keep receiving updates.
"""

from __future__ import annotations

from collections.abc import Sequence

from pycargo.state.bus import Listener
from pycargo.state.container import StateContainer


class Subscription:
    """Pairs a callback with a set of paths on one container.

    Without *paths* (``None``) the subscription covers the whole container:
    its key plus every derived listener path, the same set ``reset`` fires.
    An empty sequence subscribes to nothing.
    """

    def __init__(
        self,
        container: StateContainer,
        callback: Listener,
        paths: Sequence[str] | None = None,
    ) -> None:
        self._container = container
        self._callback = callback
        if paths is not None:
            self._paths = tuple(dict.fromkeys(paths))
        else:
            self._paths = tuple(dict.fromkeys((container.key, *container.listeners)))
        self._active = False

    @property
    def paths(self) -> tuple[str, ...]:
        return self._paths

    @property
    def active(self) -> bool:
        return self._active

    def open(self) -> Subscription:
        if not self._active:
            self._container.add_listeners(self._callback, self._paths)
            self._active = True
        return self

    def close(self) -> None:
        if not self._active:
            return
        self._container.remove_listener(self._callback, self._paths)
        self._active = False

    def __enter__(self) -> Subscription:
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def subscribe(container: StateContainer, callback: Listener, paths: Sequence[str] | None = None) -> Subscription:
    """Open and return a :class:`Subscription`."""
    return Subscription(container, callback, paths).open()
