"""Protocolos HTTP usados pelo registro de webhooks.

Permite injetar clientes GraphQL alternativos (testes, proxies).
"""

from __future__ import annotations

from typing import Any, Protocol


class GraphqlResultProtocol(Protocol):
    """Resposta decodificada de uma query."""

    body: Any


class GraphqlClientProtocol(Protocol):
    """Contrato mínimo para cliente GraphQL da Shop0."""

    async def query(
        self,
        data: dict[str, Any] | str,
        extra_headers: dict[str, str] | None = None,
        tries: int = 1,
    ) -> GraphqlResultProtocol: ...
