"""Cliente GraphQL da Admin API (camada fina sobre Shop0HttpClient)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.connectors.shop0.http_client import Shop0HttpClient, http_config_from_settings
from api.connectors.shop0.models import DataType
from utils.errors import MissingRequiredArgumentError

if TYPE_CHECKING:
    from api.connectors.shop0.http_base import HttpClientConfig
    from api.connectors.shop0.models import ResponseResult
    from config.settings import Shop0Settings

ACCESS_TOKEN_HEADER = "X-Shop0-Access-Token"


class GraphqlClient:
    """Executa queries GraphQL autenticadas para uma loja.

    Em apps privados o segredo do app é o access token; nos demais o
    token por loja é obrigatório.
    """

    def __init__(
        self,
        domain: str,
        settings: Shop0Settings,
        access_token: str | None = None,
        config: HttpClientConfig | None = None,
    ) -> None:
        if not settings.is_private_app and not access_token:
            raise MissingRequiredArgumentError(
                "Missing access token when creating GraphQL client"
            )

        self.domain = domain
        self._settings = settings
        self._access_token = access_token
        self._client = Shop0HttpClient(
            domain,
            config=config or http_config_from_settings(settings),
        )

    async def query(
        self,
        data: dict[str, Any] | str,
        extra_headers: dict[str, str] | None = None,
        tries: int = 1,
    ) -> ResponseResult:
        """Envia a query para o endpoint GraphQL da versão ativa.

        Dict é enviado como JSON ({"query": ..., "variables": ...});
        string é enviada como application/graphql.

        Raises:
            MissingRequiredArgumentError: Se a query estiver vazia
        """
        if not data:
            raise MissingRequiredArgumentError("Query missing.")

        token = (
            self._settings.api_secret_key
            if self._settings.is_private_app
            else self._access_token
        )
        headers = {ACCESS_TOKEN_HEADER: token or "", **(extra_headers or {})}
        data_type = DataType.GRAPHQL if isinstance(data, str) else DataType.JSON

        return await self._client.post(
            self._settings.graphql_path,
            data=data,
            type=data_type,
            extra_headers=headers,
            tries=tries,
        )
