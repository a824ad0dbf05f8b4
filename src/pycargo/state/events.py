"""Dispatch records.

Every ``set``/``reset`` on a container ends in one emit cycle.  When a
container has an ``on_dispatch`` hook, it receives one of these records
after the cycle's listeners have run.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DispatchOrigin(StrEnum):
    SET = "set"
    RESET = "reset"


class DispatchEvent(BaseModel):
    """Summary of one emit cycle on a container."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Container key")
    origin: DispatchOrigin
    paths: tuple[str, ...] = Field(default=(), description="Paths fired, in emit order")
    depth: int = Field(default=1, ge=1, description="Nesting level; 1 for a top-level call")
    notified: int = Field(default=0, ge=0, description="Number of callbacks invoked")
    explicit: bool = Field(default=False, description="Paths were supplied by the caller")
    dispatched_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("key")
    @classmethod
    def _non_empty_key(cls, value: str) -> str:
        if not value:
            raise ValueError("key must be non-empty")
        return value

    @property
    def nested(self) -> bool:
        return self.depth > 1
