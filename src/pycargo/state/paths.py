"""Listener path derivation.

A path is the ``.``-joined chain of keys (list indices as decimal strings)
leading to one leaf of a state tree.  Dots inside key names are not escaped,
so ``{"a.b": 1}`` and ``{"a": {"b": 1}}`` derive the same path.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from pycargo.state.nodes import NodeKind, node_kind

PATH_SEPARATOR = "."


def join_path(parts: Iterable[Any]) -> str:
    return PATH_SEPARATOR.join(str(part) for part in parts)


def split_path(path: str) -> tuple[str, ...]:
    if not path:
        return ()
    return tuple(path.split(PATH_SEPARATOR))


def _children(value: Any) -> Iterator[tuple[str, Any]]:
    kind = node_kind(value)
    if kind is NodeKind.OBJECT:
        for key, child in value.items():
            yield str(key), child
    elif kind is NodeKind.ARRAY:
        for index, child in enumerate(value):
            yield str(index), child


def derive_paths(
    value: Any,
    parent_path: tuple[str, ...] = (),
    *,
    skip_false: bool = True,
) -> list[str]:
    """Return the path of every addressable leaf under *value*.

    Primitives have no addressable leaves and yield an empty list; callers
    fall back to the container key for those.  A leaf whose value is
    literally ``False`` is skipped unless ``skip_false`` is disabled, so a
    selector such as ``{"a": True, "b": False}`` derives only ``["a"]``.

    Output order follows mapping insertion order and list index order, so
    deriving twice over the same shape gives the same list.
    """
    paths: list[str] = []
    for key, child in _children(value):
        child_path = (*parent_path, key)
        if node_kind(child) is not NodeKind.PRIMITIVE:
            paths.extend(derive_paths(child, child_path, skip_false=skip_false))
        elif child is False and skip_false:
            continue
        else:
            paths.append(join_path(child_path))
    return paths
