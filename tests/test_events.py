from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest
from pydantic import ValidationError

from pycargo.state.container import StateContainer
from pycargo.state.events import DispatchEvent, DispatchOrigin


def test_dispatch_event_defaults() -> None:
    event = DispatchEvent(key="k", origin=DispatchOrigin.SET)

    assert event.paths == ()
    assert event.depth == 1
    assert event.nested is False
    assert event.dispatched_at.tzinfo is UTC


def test_dispatch_event_is_frozen() -> None:
    event = DispatchEvent(key="k", origin="reset", paths=["a", "b"])

    assert event.origin is DispatchOrigin.RESET
    assert event.paths == ("a", "b")
    with pytest.raises(ValidationError):
        event.depth = 3  # type: ignore[misc]


def test_dispatch_event_validation() -> None:
    with pytest.raises(ValidationError):
        DispatchEvent(key="", origin=DispatchOrigin.SET)
    with pytest.raises(ValidationError):
        DispatchEvent(key="k", origin=DispatchOrigin.SET, depth=0)


def test_nested_dispatch_reports_depth() -> None:
    events: list[DispatchEvent] = []
    container = StateContainer("k", {"a": 0, "b": 0}, on_dispatch=events.append)

    def cascade(state: Any) -> None:
        container.set({"b": state["a"]})

    container.add_listeners(cascade, ["a"])
    container.set({"a": 1})

    # Inner cycle finishes first, so its record arrives first.
    assert [(event.paths, event.depth) for event in events] == [(("b",), 2), (("a",), 1)]
    assert events[0].nested is True
    assert events[1].dispatched_at <= datetime.now(UTC)
