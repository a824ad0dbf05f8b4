"""Classification of state values.

Every module in the engine dispatches on :class:`NodeKind` rather than
inspecting types ad hoc.  Mappings are OBJECT nodes, lists and tuples are
ARRAY nodes, everything else (including ``None``, ``bool`` and ``str``) is a
PRIMITIVE leaf.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from enum import StrEnum
from typing import Any


class NodeKind(StrEnum):
    PRIMITIVE = "primitive"
    OBJECT = "object"
    ARRAY = "array"


def node_kind(value: Any) -> NodeKind:
    if isinstance(value, Mapping):
        return NodeKind.OBJECT
    if isinstance(value, (list, tuple)):
        return NodeKind.ARRAY
    return NodeKind.PRIMITIVE


def is_structure(value: Any) -> bool:
    return node_kind(value) is not NodeKind.PRIMITIVE


def thaw(value: Any) -> Any:
    """Deep copy *value* into plain mutable ``dict``/``list`` nodes.

    Tuples become lists and read-only mappings become dicts, so the merge
    step can always splice in place.  Leaves are deep-copied.
    """
    kind = node_kind(value)
    if kind is NodeKind.OBJECT:
        return {key: thaw(child) for key, child in value.items()}
    if kind is NodeKind.ARRAY:
        return [thaw(child) for child in value]
    return copy.deepcopy(value)
