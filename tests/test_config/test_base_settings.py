from __future__ import annotations

import pytest

from config.settings.base.core import BaseSettings, _load_base_from_env


def test_defaults_are_valid() -> None:
    assert BaseSettings().validate() == []


def test_reload_is_rejected_in_production() -> None:
    errors = BaseSettings(environment="production", reload=True).validate()
    assert errors == ["RELOAD não pode ser usado em produção"]


def test_invalid_port_and_level() -> None:
    errors = BaseSettings(port=0, log_level="VERBOSE").validate()
    assert "LOG_LEVEL inválido: VERBOSE" in errors
    assert "PORT fora do intervalo: 0" in errors


def test_load_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "prod")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PORT", "9000")

    settings = _load_base_from_env()

    assert settings.environment == "production"
    assert settings.is_production is True
    assert settings.log_level == "DEBUG"
    assert settings.port == 9000


def test_unknown_environment_falls_back_to_development(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("ENVIRONMENT", "qa")
    assert _load_base_from_env().environment == "development"
