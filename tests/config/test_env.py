from __future__ import annotations

import os

import pytest

from rolodex.config import ConfigurationError, MissingConfigurationError, require_env_vars
from rolodex.config.env import env_float, env_int, optional_env_var


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_raises_when_any_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)
    monkeypatch.setenv("BLANK_VAR", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR", "BLANK_VAR"])

    assert "BLANK_VAR, MISSING_VAR" in str(exc.value)


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  ")
    assert optional_env_var("EXAMPLE_VAR") is None

    monkeypatch.setenv("EXAMPLE_VAR", " value ")
    assert optional_env_var("EXAMPLE_VAR") == "value"
    assert os.getenv("EXAMPLE_VAR") == " value "


def test_numeric_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_NUMBER", raising=False)
    assert env_int("EXAMPLE_NUMBER", 7) == 7
    assert env_float("EXAMPLE_NUMBER", 1.5) == 1.5

    monkeypatch.setenv("EXAMPLE_NUMBER", "3")
    assert env_int("EXAMPLE_NUMBER", 7) == 3
    assert env_float("EXAMPLE_NUMBER", 1.5) == 3.0

    monkeypatch.setenv("EXAMPLE_NUMBER", "three")
    with pytest.raises(ConfigurationError, match="EXAMPLE_NUMBER"):
        env_int("EXAMPLE_NUMBER", 7)
    with pytest.raises(ConfigurationError, match="EXAMPLE_NUMBER"):
        env_float("EXAMPLE_NUMBER", 1.5)
