"""Engine configuration for pycargo."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pycargo.exceptions import CargoConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise CargoConfigError(f"{name} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class CargoConfig:
    """Container behaviour switches.

    Parameters
    ----------
    max_dispatch_depth : int
        Upper bound on nested ``set``/``reset`` calls made from inside
        listener callbacks.  ``0`` disables the check, so a callback that
        unconditionally calls ``set`` recurses until Python's own limit.
    isolate_callback_errors : bool
        When enabled, an exception raised by one listener is logged and the
        remaining listeners still run.  When disabled (default) the exception
        propagates to the caller of ``set``/``reset``.
    settable_false_leaves : bool
        Treat state leaves whose value is literally ``False`` as ordinary
        addressable leaves.  By default they are neither derived as paths
        nor overwritten by partial updates, mirroring selector semantics
        where ``False`` means "not selected".
    log_payloads : bool
        Include a redacted preview of partials and state in DEBUG logs.
    log_max_string : int
        Truncation length for strings in logged previews.
    """

    max_dispatch_depth: int = 0
    isolate_callback_errors: bool = False
    settable_false_leaves: bool = False
    log_payloads: bool = False
    log_max_string: int = 200

    def __post_init__(self) -> None:
        if self.max_dispatch_depth < 0:
            raise CargoConfigError("max_dispatch_depth must be >= 0")
        if self.log_max_string <= 0:
            raise CargoConfigError("log_max_string must be > 0")

    @classmethod
    def from_env(cls, **overrides: Any) -> CargoConfig:
        """Create configuration from ``CARGO_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_INT_MAP = {
            "CARGO_MAX_DISPATCH_DEPTH": "max_dispatch_depth",
            "CARGO_LOG_MAX_STRING": "log_max_string",
        }
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_int(env_key, val)

        _ENV_BOOL_MAP = {
            "CARGO_ISOLATE_CALLBACK_ERRORS": "isolate_callback_errors",
            "CARGO_SETTABLE_FALSE_LEAVES": "settable_false_leaves",
            "CARGO_LOG_PAYLOADS": "log_payloads",
        }
        for env_key, field_name in _ENV_BOOL_MAP.items():
            if field_name in overrides:
                continue
            default = getattr(cls, field_name)
            config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
