"""Partial-update merge.

``merge`` folds a partial update into a working copy of the state tree.
Objects merge key by key, arrays splice index by index.  The shape of the
tree is fixed: a partial can change leaves and grow arrays but never adds
new object keys.

A simpler deep-overwrite merge (replace every nested value the partial
names) predates this one.  It is not compatible: under deep-overwrite
``{"list": [9]}`` replaces the whole list, here it only replaces index 0.
"""

from __future__ import annotations

from typing import Any

from pycargo.exceptions import ShapeMismatchError
from pycargo.state.nodes import NodeKind, node_kind, thaw
from pycargo.state.paths import join_path


def _parse_index(raw: Any, path: tuple[str, ...]) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool):
        index = raw
    elif isinstance(raw, str) and raw.isascii() and raw.isdigit():
        index = int(raw)
    else:
        raise ShapeMismatchError(
            f"array index must be a non-negative integer, got {raw!r}",
            path=join_path(path),
        )
    if index < 0:
        raise ShapeMismatchError(f"array index must be non-negative, got {index}", path=join_path(path))
    return index


def _indexed_items(partial: Any, path: tuple[str, ...]) -> list[tuple[int, Any]]:
    kind = node_kind(partial)
    if kind is NodeKind.ARRAY:
        return list(enumerate(partial))
    if kind is NodeKind.OBJECT:
        # Validate every index up front so a bad key leaves nothing half-applied.
        return [(_parse_index(key, path), value) for key, value in partial.items()]
    raise ShapeMismatchError(
        f"array partial must be a mapping of index to value or a list, got {type(partial).__name__}",
        path=join_path(path),
    )


def _is_index_partial(partial: Any) -> bool:
    return bool(partial) and all(isinstance(key, int) and not isinstance(key, bool) for key in partial)


def spread_array(partial: Any, next_list: list[Any], *, _path: tuple[str, ...] = ()) -> list[Any]:
    """Apply an index -> value partial to *next_list* in place.

    An index at or past the end grows the list, padding with ``None`` so the
    value lands at the requested index.  A structured value aimed at a
    nested list recurses; anything else replaces exactly one element.
    """
    for index, value in _indexed_items(partial, _path):
        if index >= len(next_list):
            next_list.extend([None] * (index - len(next_list)))
            next_list.append(thaw(value))
            continue
        current = next_list[index]
        if node_kind(value) is not NodeKind.PRIMITIVE and node_kind(current) is NodeKind.ARRAY:
            spread_array(value, current, _path=(*_path, str(index)))
            continue
        next_list[index] = thaw(value)
    return next_list


def merge(
    previous: Any,
    next_tree: Any,
    partial: Any,
    *,
    settable_false: bool = False,
    _path: tuple[str, ...] = (),
) -> Any:
    """Merge *partial* into *next_tree* and return it.

    *previous* is the committed tree and decides which keys exist;
    *next_tree* is a working copy of it that gets mutated.  Callers must
    never pass the container's default snapshot as *next_tree*.

    Keys missing from *partial* are left alone; keys in *partial* that the
    previous tree does not have are ignored.  A previous leaf holding
    literally ``False`` is not overwritten unless ``settable_false`` is set.

    Raises
    ------
    ShapeMismatchError
        If the partial is not a mapping where the state has an object, or
        not an index mapping/list where the state has an array.  Callers
        work on a copy, so nothing is committed when this is raised.
    """
    kind = node_kind(previous)

    if kind is NodeKind.PRIMITIVE:
        return thaw(partial)

    if kind is NodeKind.ARRAY:
        if node_kind(next_tree) is not NodeKind.ARRAY:
            raise ShapeMismatchError("working tree does not match the previous array", path=join_path(_path))
        return spread_array(partial, next_tree, _path=_path)

    if node_kind(partial) is not NodeKind.OBJECT:
        raise ShapeMismatchError(
            f"object partial must be a mapping, got {type(partial).__name__}",
            path=join_path(_path),
        )
    if _is_index_partial(partial) and not any(key in previous for key in partial):
        raise ShapeMismatchError("array index partial aimed at an object", path=join_path(_path))

    for key, prev_value in previous.items():
        if key not in partial:
            continue
        incoming = partial[key]
        if node_kind(prev_value) is not NodeKind.PRIMITIVE:
            merge(prev_value, next_tree[key], incoming, settable_false=settable_false, _path=(*_path, str(key)))
        elif prev_value is False and not settable_false:
            continue
        else:
            next_tree[key] = thaw(incoming)
    return next_tree
