"""Log-safe previews of state values.

Containers hold arbitrary application state: form fields, credentials,
large lists.  DEBUG logs only ever see a bounded, masked preview of it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "passwd",
        "secret",
        "token",
        "accesstoken",
        "refreshtoken",
        "apikey",
        "authorization",
        "cookie",
        "pin",
    }
)

_MAX_DEPTH = 8


def _is_sensitive(key: str) -> bool:
    return key.replace("_", "").replace("-", "").lower() in _SENSITIVE_KEYS


def preview_for_log(
    value: Any,
    *,
    max_string: int = 200,
    max_items: int = 20,
    _depth: int = 0,
) -> Any:
    """Return a bounded copy of *value* with sensitive keys masked."""
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, Mapping):
        preview: dict[str, Any] = {}
        for index, (k, v) in enumerate(value.items()):
            if index >= max_items:
                preview["…"] = f"<{len(value) - max_items} more>"
                break
            key = str(k)
            if _is_sensitive(key):
                preview[key] = "<redacted>"
            else:
                preview[key] = preview_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
        return preview

    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        items = [
            preview_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
            for v in list(value)[:max_items]
        ]
        if len(value) > max_items:
            items.append(f"<{len(value) - max_items} more>")
        return items

    return repr(value)
