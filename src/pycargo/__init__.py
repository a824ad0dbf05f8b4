"""pycargo - Selective-subscription state containers."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pycargo")
except PackageNotFoundError:
    __version__ = "0+local"
from pycargo.config import CargoConfig
from pycargo.exceptions import (
    CargoConfigError,
    CargoError,
    ContainerNotFoundError,
    DispatchDepthError,
    DuplicateKeyError,
    InvalidKeyError,
    InvalidSelectorError,
    ShapeMismatchError,
    UnsupportedOperationError,
)
from pycargo.registry import ContainerRegistry, create_container
from pycargo.selector import Selection, selector_paths
from pycargo.state.bus import EventBus
from pycargo.state.container import StateContainer
from pycargo.state.events import DispatchEvent, DispatchOrigin
from pycargo.state.merge import merge, spread_array
from pycargo.state.nodes import NodeKind, node_kind
from pycargo.state.paths import derive_paths, join_path, split_path
from pycargo.subscription import Subscription, subscribe

__all__ = [
    "__version__",
    "CargoConfig",
    "CargoConfigError",
    "CargoError",
    "ContainerNotFoundError",
    "ContainerRegistry",
    "DispatchDepthError",
    "DispatchEvent",
    "DispatchOrigin",
    "DuplicateKeyError",
    "EventBus",
    "InvalidKeyError",
    "InvalidSelectorError",
    "NodeKind",
    "Selection",
    "ShapeMismatchError",
    "StateContainer",
    "Subscription",
    "UnsupportedOperationError",
    "create_container",
    "derive_paths",
    "join_path",
    "merge",
    "node_kind",
    "selector_paths",
    "split_path",
    "spread_array",
    "subscribe",
]
