from __future__ import annotations

from pycargo._redact import preview_for_log


def test_preview_masks_sensitive_keys() -> None:
    state = {
        "user": "ann",
        "password": "pw",
        "session": {"access_token": "abc", "apiKey": "k"},
        "items": [{"secret": "s", "label": "ok"}],
    }

    preview = preview_for_log(state)

    assert preview["user"] == "ann"
    assert preview["password"] == "<redacted>"
    assert preview["session"] == {"access_token": "<redacted>", "apiKey": "<redacted>"}
    assert preview["items"] == [{"secret": "<redacted>", "label": "ok"}]


def test_preview_truncates_long_strings() -> None:
    preview = preview_for_log({"bio": "x" * 600}, max_string=10)

    assert preview["bio"].startswith("x" * 10)
    assert "<truncated>" in preview["bio"]


def test_preview_bounds_collection_size() -> None:
    preview = preview_for_log(list(range(30)), max_items=5)

    assert preview == [0, 1, 2, 3, 4, "<25 more>"]


def test_preview_keeps_scalars_and_reprs_objects() -> None:
    class Opaque:
        def __repr__(self) -> str:
            return "<Opaque>"

    assert preview_for_log(None) is None
    assert preview_for_log(False) is False
    assert preview_for_log(1.5) == 1.5
    assert preview_for_log({"o": Opaque()}) == {"o": "<Opaque>"}


def test_preview_limits_depth() -> None:
    deep: dict = {}
    node = deep
    for _ in range(20):
        node["n"] = {}
        node = node["n"]

    preview = preview_for_log(deep)
    for _ in range(9):
        preview = preview["n"]

    assert preview == "<max-depth>"
