"""Transporte HTTP base para o conector Shop0.

Uma tentativa = um httpx.AsyncClient efêmero; sem pooling entre tentativas.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from utils.errors import HttpRequestError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

# 1 segundo
RETRY_WAIT_SECONDS = 1.0

# Teto para Retry-After informado pela Shop0
RETRY_AFTER_MAX_SECONDS = 60.0


@dataclass
class HttpClientConfig:
    """Configuração do transporte HTTP."""

    timeout_seconds: float = 30.0
    retry_wait_seconds: float = RETRY_WAIT_SECONDS
    verify_ssl: bool = True
    user_agent_prefix: str = ""
    default_headers: dict[str, str] = field(default_factory=dict)
    transport: httpx.AsyncBaseTransport | None = None


async def send_once(
    config: HttpClientConfig,
    method: str,
    url: str,
    headers: Mapping[str, str],
    content: str | None,
) -> httpx.Response:
    """Executa uma única tentativa HTTP.

    Raises:
        HttpRequestError: Falha de rede antes de obter status
    """
    try:
        async with httpx.AsyncClient(
            verify=config.verify_ssl,
            transport=config.transport,
            timeout=config.timeout_seconds,
        ) as client:
            return await client.request(
                method,
                url,
                headers=dict(headers),
                content=content,
            )
    except httpx.HTTPError as exc:
        raise HttpRequestError(f"Failed to make Shop0 HTTP request: {exc}") from exc


async def retry_sleep(seconds: float) -> None:
    """Espera entre tentativas."""
    logger.info("http_backoff", extra={"backoff_seconds": seconds})
    await asyncio.sleep(seconds)
