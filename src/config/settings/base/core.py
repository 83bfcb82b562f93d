"""Settings do processo que hospeda o Conecta_Shop0.

Ambiente, nível de log e bind do servidor ASGI. Credenciais da Shop0
ficam em config.settings.shop0.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "prod": "production",
    "production": "production",
    "stage": "staging",
    "staging": "staging",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class BaseSettings:
    """Configuração do processo.

    Attributes:
        environment: development | staging | production
        service_name: Identificador do serviço nos logs
        log_level: Nível do logger raiz
        host: Interface de bind do uvicorn
        port: Porta do uvicorn
        reload: Auto-reload (apenas desenvolvimento)
    """

    environment: Environment = "development"
    service_name: str = "conecta-shop0"
    log_level: str = "INFO"
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8080
    reload: bool = False

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Retorna erros de configuração (vazia = OK)."""
        errors: list[str] = []

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if self.log_level not in _LOG_LEVELS:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")

        if not 0 < self.port < 65536:
            errors.append(f"PORT fora do intervalo: {self.port}")

        if self.reload and self.is_production:
            errors.append("RELOAD não pode ser usado em produção")

        return errors


def _load_base_from_env() -> BaseSettings:
    environment = _ENVIRONMENT_ALIASES.get(
        os.getenv("ENVIRONMENT", "").strip().lower(), "development"
    )
    return BaseSettings(
        environment=environment,
        service_name=os.getenv("SERVICE_NAME", "conecta-shop0"),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        host=os.getenv("HOST", "0.0.0.0"),  # noqa: S104
        port=int(os.getenv("PORT", "8080")),
        reload=os.getenv("RELOAD", "").lower() in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """BaseSettings do ambiente, carregada uma única vez."""
    return _load_base_from_env()
