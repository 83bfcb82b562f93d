"""Modelos de request/response do cliente HTTP Shop0."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from utils.errors import InvalidConfigurationError

if TYPE_CHECKING:
    import httpx


class Method(str, Enum):
    """Verbos HTTP suportados pela Admin API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class DataType(str, Enum):
    """Codificação declarada do body (valor = Content-Type)."""

    JSON = "application/json"
    URL_ENCODED = "application/x-www-form-urlencoded"
    GRAPHQL = "application/graphql"


@dataclass(frozen=True)
class RequestSpec:
    """Uma requisição lógica à Admin API.

    Attributes:
        method: Verbo HTTP
        path: Path absoluto (ex: /admin/api/2021-10/shop.json)
        query: Parâmetros de query opcionais
        data: Body opcional (dict ou string já codificada)
        type: Codificação do body
        extra_headers: Headers adicionais do chamador
        tries: Orçamento de tentativas (>= 1)
    """

    method: Method
    path: str
    query: dict[str, Any] | None = None
    data: dict[str, Any] | str | None = None
    type: DataType = DataType.JSON
    extra_headers: dict[str, str] = field(default_factory=dict)
    tries: int = 1

    def __post_init__(self) -> None:
        if self.tries < 1:
            raise InvalidConfigurationError(
                f"Number of tries must be >= 1, got {self.tries}"
            )


@dataclass(frozen=True)
class ResponseResult:
    """Resposta 2xx decodificada."""

    body: Any
    headers: httpx.Headers
