from __future__ import annotations

import json

import httpx
import pytest

from api.connectors.shop0 import http_client as http_client_module
from api.connectors.shop0.graphql_client import ACCESS_TOKEN_HEADER, GraphqlClient
from api.connectors.shop0.http_base import HttpClientConfig
from config.settings import ApiVersion, Shop0Settings
from utils.errors import MissingRequiredArgumentError

DOMAIN = "loja.myshop0.com"


def _settings(**overrides: object) -> Shop0Settings:
    values: dict[str, object] = {
        "api_key": "key",
        "api_secret_key": "app-secret",
        "scopes": ("read_orders",),
        "host_name": "app.example.com",
        "api_version": ApiVersion.OCTOBER21,
    }
    values.update(overrides)
    return Shop0Settings(**values)  # type: ignore[arg-type]


def _config(requests: list[httpx.Request]) -> HttpClientConfig:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"data": {"shop": {"name": "Loja"}}})

    return HttpClientConfig(transport=httpx.MockTransport(handler))


def test_missing_access_token_for_public_app() -> None:
    with pytest.raises(MissingRequiredArgumentError, match="Missing access token"):
        GraphqlClient(DOMAIN, _settings())


def test_private_app_does_not_need_access_token() -> None:
    client = GraphqlClient(DOMAIN, _settings(is_private_app=True))
    assert client.domain == DOMAIN


@pytest.mark.asyncio
async def test_empty_query_is_rejected() -> None:
    client = GraphqlClient(DOMAIN, _settings(), access_token="shpat")
    with pytest.raises(MissingRequiredArgumentError, match="Query missing."):
        await client.query("")


@pytest.mark.asyncio
async def test_string_query_posts_graphql_with_token() -> None:
    requests: list[httpx.Request] = []
    client = GraphqlClient(DOMAIN, _settings(), access_token="shpat", config=_config(requests))

    result = await client.query("{ shop { name } }")

    assert result.body == {"data": {"shop": {"name": "Loja"}}}
    request = requests[0]
    assert request.method == "POST"
    assert request.url.path == "/admin/api/2021-10/graphql.json"
    assert request.headers["Content-Type"] == "application/graphql"
    assert request.headers[ACCESS_TOKEN_HEADER] == "shpat"


@pytest.mark.asyncio
async def test_dict_query_posts_json_with_app_secret_when_private() -> None:
    requests: list[httpx.Request] = []
    client = GraphqlClient(DOMAIN, _settings(is_private_app=True), config=_config(requests))

    payload = {"query": "query($id: ID!) { node(id: $id) { id } }", "variables": {"id": "1"}}
    await client.query(payload, extra_headers={"X-Extra": "1"})

    request = requests[0]
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers[ACCESS_TOKEN_HEADER] == "app-secret"
    assert request.headers["X-Extra"] == "1"
    assert json.loads(request.content) == payload


@pytest.mark.asyncio
async def test_default_config_comes_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list[tuple[HttpClientConfig, dict[str, str]]] = []

    async def fake_send_once(
        config: HttpClientConfig,
        method: str,
        url: str,
        headers: dict[str, str],
        content: str | None,
    ) -> httpx.Response:
        captured.append((config, dict(headers)))
        return httpx.Response(200, json={"data": {}})

    monkeypatch.setattr(http_client_module, "send_once", fake_send_once)
    client = GraphqlClient(
        DOMAIN,
        _settings(user_agent_prefix="MinhaApp/1.0", request_timeout_seconds=12.0),
        access_token="shpat",
    )

    await client.query("{ shop { name } }")

    config, headers = captured[0]
    assert config.timeout_seconds == 12.0
    assert headers["User-Agent"].startswith("MinhaApp/1.0 | Shop0 API Library")
