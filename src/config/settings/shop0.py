"""Settings específicas da Shop0.

Credenciais do app, versão da Admin API e parâmetros do cliente HTTP.
Somente leitura após o startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from utils.errors import InvalidConfigurationError

# Identidade da biblioteca (compõe o User-Agent)
LIBRARY_NAME: str = "Shop0 API Library"
LIBRARY_VERSION: str = "1.2.0"

# Domínio das lojas na plataforma
SHOP_DOMAIN_SUFFIX: str = "myshop0"


class ApiVersion(str, Enum):
    """Versões publicadas da Admin API."""

    APRIL20 = "2020-04"
    JULY20 = "2020-07"
    OCTOBER20 = "2020-10"
    JANUARY21 = "2021-01"
    APRIL21 = "2021-04"
    JULY21 = "2021-07"
    OCTOBER21 = "2021-10"
    UNSTABLE = "unstable"


LATEST_API_VERSION: ApiVersion = ApiVersion.OCTOBER21


def version_compatible(
    reference: ApiVersion | str,
    current: ApiVersion | str,
) -> bool:
    """Retorna True se `current` é igual ou posterior a `reference`.

    `unstable` é sempre compatível. Versões seguem o formato AAAA-MM,
    então a comparação lexicográfica equivale à cronológica.
    """
    current_value = ApiVersion(current).value
    if current_value == ApiVersion.UNSTABLE.value:
        return True
    return current_value >= ApiVersion(reference).value


@dataclass(frozen=True)
class Shop0Settings:
    """Configurações do app Shop0.

    Attributes:
        api_key: Chave pública do app
        api_secret_key: Segredo compartilhado (assina webhooks e callbacks)
        scopes: Escopos de acesso solicitados
        host_name: Host público do app (monta callback URLs de webhook)
        api_version: Versão ativa da Admin API
        is_embedded_app: App embutido no admin da Shop0
        is_private_app: App single-tenant; o segredo é o access token
        user_agent_prefix: Prefixo opcional do User-Agent
        log_file: Arquivo opcional para avisos de depreciação
        request_timeout_seconds: Timeout das requisições HTTP
    """

    api_key: str = ""
    api_secret_key: str = ""
    scopes: tuple[str, ...] = ()
    host_name: str = ""
    api_version: ApiVersion = LATEST_API_VERSION
    is_embedded_app: bool = True
    is_private_app: bool = False
    user_agent_prefix: str = ""
    log_file: str = ""
    request_timeout_seconds: float = 30.0

    @property
    def graphql_path(self) -> str:
        """Path do endpoint GraphQL da versão ativa."""
        return f"/admin/api/{self.api_version.value}/graphql.json"

    def validate(self) -> list[str]:
        """Valida configurações mínimas.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.api_key:
            errors.append("SHOP0_API_KEY não configurado")

        if not self.api_secret_key:
            errors.append("SHOP0_API_SECRET_KEY não configurado")

        if not self.scopes:
            errors.append("SHOP0_SCOPES não configurado")

        if not self.host_name:
            errors.append("SHOP0_HOST_NAME não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("SHOP0_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _parse_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


def _parse_scopes(value: str) -> tuple[str, ...]:
    return tuple(scope.strip() for scope in value.split(",") if scope.strip())


def _parse_api_version(value: str) -> ApiVersion:
    try:
        return ApiVersion(value.strip())
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"SHOP0_API_VERSION inválida: {value!r}"
        ) from exc


def _load_from_env() -> Shop0Settings:
    """Carrega Shop0Settings a partir de variáveis de ambiente."""
    return Shop0Settings(
        api_key=os.getenv("SHOP0_API_KEY", ""),
        api_secret_key=os.getenv("SHOP0_API_SECRET_KEY", ""),
        scopes=_parse_scopes(os.getenv("SHOP0_SCOPES", "")),
        host_name=os.getenv("SHOP0_HOST_NAME", ""),
        api_version=_parse_api_version(
            os.getenv("SHOP0_API_VERSION", LATEST_API_VERSION.value)
        ),
        is_embedded_app=_parse_bool(os.getenv("SHOP0_IS_EMBEDDED_APP", "true")),
        is_private_app=_parse_bool(os.getenv("SHOP0_IS_PRIVATE_APP", "false")),
        user_agent_prefix=os.getenv("SHOP0_USER_AGENT_PREFIX", ""),
        log_file=os.getenv("SHOP0_LOG_FILE", ""),
        request_timeout_seconds=float(
            os.getenv("SHOP0_REQUEST_TIMEOUT_SECONDS", "30")
        ),
    )


@lru_cache(maxsize=1)
def get_shop0_settings() -> Shop0Settings:
    """Retorna instância cacheada de Shop0Settings."""
    return _load_from_env()
