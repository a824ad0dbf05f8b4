"""Custom exception hierarchy for pycargo."""

from __future__ import annotations


class CargoError(Exception):
    """Base exception for all pycargo errors."""


class CargoConfigError(CargoError):
    """Invalid configuration value."""


class InvalidKeyError(CargoError):
    """Container key is missing, empty, or not a string."""


class DuplicateKeyError(CargoError):
    """A registry already holds a container under this key."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class ContainerNotFoundError(CargoError, KeyError):
    """Registry lookup for an unknown key."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class InvalidSelectorError(CargoError):
    """Selector is not a structure (mapping or list)."""


class UnsupportedOperationError(CargoError):
    """Operation requires an addressable (non-primitive) state."""


class ShapeMismatchError(CargoError):
    """A partial update does not fit the shape of the current state.

    ``path`` is the dotted location of the offending subtree; it is empty
    when the mismatch is at the root.
    """

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class DispatchDepthError(CargoError):
    """Re-entrant ``set``/``reset`` calls exceeded ``max_dispatch_depth``."""

    def __init__(self, message: str, *, key: str = "", depth: int = 0) -> None:
        self.key = key
        self.depth = depth
        super().__init__(message)
