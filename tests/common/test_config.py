from __future__ import annotations

import os

import pytest

from optimistic_state.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_remote_config,
    optional_float_env,
    require_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_raises_when_any_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR"])

    assert "MISSING_VAR" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_require_env_vars_restores_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEMP_VAR", "123")

    assert os.getenv("TEMP_VAR") == "123"
    result = require_env_var("TEMP_VAR")
    assert result == "123"


def test_optional_float_env_defaults_and_validates(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TIMEOUT_VAR", raising=False)
    assert optional_float_env("TIMEOUT_VAR", 2.5) == 2.5

    monkeypatch.setenv("TIMEOUT_VAR", "4")
    assert optional_float_env("TIMEOUT_VAR", 2.5) == 4.0

    monkeypatch.setenv("TIMEOUT_VAR", "soon")
    with pytest.raises(ConfigurationError, match="number"):
        optional_float_env("TIMEOUT_VAR", 2.5)

    monkeypatch.setenv("TIMEOUT_VAR", "0")
    with pytest.raises(ConfigurationError, match="positive"):
        optional_float_env("TIMEOUT_VAR", 2.5)


def test_remote_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPTIMISTIC_STATE_ENDPOINT", " https://api.example.test/items/1 ")
    monkeypatch.setenv("OPTIMISTIC_STATE_METHOD", "post")
    monkeypatch.setenv("OPTIMISTIC_STATE_TIMEOUT", "3")

    config = get_remote_config()

    assert config.endpoint == "https://api.example.test/items/1"
    assert config.method == "POST"
    assert config.resilience.timeout_seconds == 3.0
    assert config.resilience.ratelimit is not None


def test_remote_config_defaults_to_put(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPTIMISTIC_STATE_ENDPOINT", "https://api.example.test/items/1")
    monkeypatch.delenv("OPTIMISTIC_STATE_METHOD", raising=False)
    monkeypatch.delenv("OPTIMISTIC_STATE_TIMEOUT", raising=False)

    config = get_remote_config()

    assert config.method == "PUT"
    assert config.resilience.timeout_seconds == 10.0


def test_remote_config_rejects_unknown_method(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPTIMISTIC_STATE_ENDPOINT", "https://api.example.test/items/1")
    monkeypatch.setenv("OPTIMISTIC_STATE_METHOD", "DELETE")

    with pytest.raises(ConfigurationError, match="OPTIMISTIC_STATE_METHOD"):
        get_remote_config()


def test_remote_config_requires_endpoint(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPTIMISTIC_STATE_ENDPOINT", raising=False)

    with pytest.raises(MissingConfigurationError):
        get_remote_config()
