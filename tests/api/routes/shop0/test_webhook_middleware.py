"""Testes do WebhookMiddleware sobre uma app FastAPI mínima."""

from __future__ import annotations

import logging
from typing import Any

import httpx
import pytest
from fastapi import FastAPI

from api.connectors.shop0.signature import sign_base64
from api.connectors.shop0.webhook import (
    DOMAIN_HEADER,
    HMAC_HEADER,
    TOPIC_HEADER,
    WEBHOOK_ID_HEADER,
    RegisterOptions,
    WebhookRegistry,
)
from api.routes.shop0.webhook import WebhookMiddleware
from app.observability import get_correlation_id
from config.settings import Shop0Settings

SECRET = "app-secret"
BODY = b'{"id":1}'


class _UnchangedSubscriptionClient:
    async def query(self, data: Any, extra_headers: Any = None, tries: int = 1) -> Any:
        class _Result:
            body = {
                "data": {
                    "webhookSubscriptions": {
                        "edges": [
                            {
                                "node": {
                                    "id": "sub-1",
                                    "endpoint": {
                                        "__typename": "WebhookHttpEndpoint",
                                        "callbackUrl": "https://app.example.com/webhooks",
                                    },
                                }
                            }
                        ]
                    }
                }
            }

        return _Result()


async def _build_app(handler: Any) -> FastAPI:
    settings = Shop0Settings(api_secret_key=SECRET, host_name="app.example.com")
    registry = WebhookRegistry(
        settings, client_factory=lambda shop, token: _UnchangedSubscriptionClient()
    )
    await registry.register(
        RegisterOptions(
            path="/webhooks",
            topic="ORDERS_CREATE",
            shop="loja.myshop0.com",
            access_token="token",
            webhook_handler=handler,
        )
    )

    app = FastAPI()
    app.add_middleware(WebhookMiddleware, registry=registry)

    @app.post("/other")
    async def other() -> dict[str, str]:
        return {"routed": "yes"}

    return app


def _client(app: FastAPI) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


def _headers(signature: str | None = None) -> dict[str, str]:
    return {
        HMAC_HEADER: signature or sign_base64(SECRET, BODY),
        TOPIC_HEADER: "orders/create",
        DOMAIN_HEADER: "loja.myshop0.com",
        WEBHOOK_ID_HEADER: "delivery-123",
    }


@pytest.mark.asyncio
async def test_delivery_is_dispatched_with_correlation_id() -> None:
    seen: list[tuple[str, str]] = []

    def handler(topic: str, shop: str, body: str) -> None:
        seen.append((topic, get_correlation_id()))

    app = await _build_app(handler)
    async with _client(app) as client:
        response = await client.post("/webhooks", content=BODY, headers=_headers())

    assert response.status_code == 200
    assert seen == [("ORDERS_CREATE", "delivery-123")]
    assert get_correlation_id() == ""


@pytest.mark.asyncio
async def test_rejected_delivery_returns_status_and_logs(
    caplog: pytest.LogCaptureFixture,
) -> None:
    app = await _build_app(lambda topic, shop, body: None)

    with caplog.at_level(logging.WARNING, logger="api.routes.shop0.webhook"):
        async with _client(app) as client:
            response = await client.post(
                "/webhooks", content=BODY, headers=_headers(signature="invalid")
            )

    assert response.status_code == 403
    assert "webhook_rejected" in [record.message for record in caplog.records]


@pytest.mark.asyncio
async def test_handler_failure_returns_500(caplog: pytest.LogCaptureFixture) -> None:
    def handler(topic: str, shop: str, body: str) -> None:
        raise ValueError("boom")

    app = await _build_app(handler)

    with caplog.at_level(logging.ERROR, logger="api.routes.shop0.webhook"):
        async with _client(app) as client:
            response = await client.post("/webhooks", content=BODY, headers=_headers())

    assert response.status_code == 500
    assert "webhook_handler_failed" in [record.message for record in caplog.records]


@pytest.mark.asyncio
async def test_other_paths_reach_router() -> None:
    app = await _build_app(lambda topic, shop, body: None)

    async with _client(app) as client:
        response = await client.post("/other")
        get_response = await client.get("/webhooks")

    assert response.json() == {"routed": "yes"}
    assert get_response.status_code in (404, 405)
