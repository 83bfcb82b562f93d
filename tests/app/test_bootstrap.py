"""Testes do composition root (app.bootstrap)."""

from __future__ import annotations

import pytest

import app.bootstrap as bootstrap
from api.connectors.shop0.webhook import WebhookRegistry
from config.settings import BaseSettings, Shop0Settings
from utils.errors import InvalidConfigurationError

VALID_SHOP0 = Shop0Settings(
    api_key="key",
    api_secret_key="secret",
    scopes=("read_orders",),
    host_name="app.example.com",
)


def _patch_settings(
    monkeypatch: pytest.MonkeyPatch,
    environment: str,
    shop0: Shop0Settings,
) -> None:
    monkeypatch.setattr(
        bootstrap, "get_base_settings", lambda: BaseSettings(environment=environment)
    )
    monkeypatch.setattr(bootstrap, "get_shop0_settings", lambda: shop0)


def test_invalid_settings_fail_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_settings(monkeypatch, "production", Shop0Settings())

    with pytest.raises(InvalidConfigurationError, match="SHOP0_API_KEY"):
        bootstrap.validate_runtime_settings()


def test_invalid_settings_only_warn_in_development(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_settings(monkeypatch, "development", Shop0Settings())
    bootstrap.validate_runtime_settings()


def test_valid_settings_pass_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_settings(monkeypatch, "production", VALID_SHOP0)
    bootstrap.validate_runtime_settings()


def test_create_webhook_registry_returns_fresh_instances() -> None:
    first = bootstrap.create_webhook_registry(VALID_SHOP0)
    second = bootstrap.create_webhook_registry(VALID_SHOP0)

    assert isinstance(first, WebhookRegistry)
    assert first is not second
    assert first.entries == ()
