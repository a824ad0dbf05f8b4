from __future__ import annotations

import pytest

from pycargo.config import CargoConfig
from pycargo.exceptions import CargoConfigError


def test_defaults() -> None:
    config = CargoConfig()

    assert config.max_dispatch_depth == 0
    assert config.isolate_callback_errors is False
    assert config.settable_false_leaves is False
    assert config.log_payloads is False
    assert config.log_max_string == 200


def test_from_env_reads_cargo_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARGO_MAX_DISPATCH_DEPTH", "16")
    monkeypatch.setenv("CARGO_ISOLATE_CALLBACK_ERRORS", "yes")
    monkeypatch.setenv("CARGO_SETTABLE_FALSE_LEAVES", "on")
    monkeypatch.setenv("CARGO_LOG_PAYLOADS", "1")
    monkeypatch.setenv("CARGO_LOG_MAX_STRING", "32")

    config = CargoConfig.from_env()

    assert config == CargoConfig(
        max_dispatch_depth=16,
        isolate_callback_errors=True,
        settable_false_leaves=True,
        log_payloads=True,
        log_max_string=32,
    )


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARGO_MAX_DISPATCH_DEPTH", "16")
    monkeypatch.setenv("CARGO_LOG_PAYLOADS", "true")

    config = CargoConfig.from_env(max_dispatch_depth=2, log_payloads=False)

    assert config.max_dispatch_depth == 2
    assert config.log_payloads is False


def test_from_env_unrecognised_bool_keeps_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARGO_ISOLATE_CALLBACK_ERRORS", "maybe")

    assert CargoConfig.from_env().isolate_callback_errors is False


def test_from_env_rejects_non_integer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARGO_MAX_DISPATCH_DEPTH", "deep")

    with pytest.raises(CargoConfigError, match="CARGO_MAX_DISPATCH_DEPTH"):
        CargoConfig.from_env()


def test_invalid_values_rejected() -> None:
    with pytest.raises(CargoConfigError):
        CargoConfig(max_dispatch_depth=-1)
    with pytest.raises(CargoConfigError):
        CargoConfig(log_max_string=0)
