from __future__ import annotations

import httpx
import pytest

from api.connectors.shop0.webhook import WebhookRegistry
from app.app import create_app
from config.settings import Shop0Settings


@pytest.mark.asyncio
async def test_create_app_exposes_registry_and_health() -> None:
    registry = WebhookRegistry(Shop0Settings(api_secret_key="secret"))
    app = create_app(registry)

    assert app.state.webhook_registry is registry

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
