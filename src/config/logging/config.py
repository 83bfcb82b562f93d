"""Configuração centralizada de logging.

Logging estruturado JSON (python-json-logger) com correlation_id e service
injetados em todo record. Avisos de depreciação da Admin API podem ser
espelhados em arquivo dedicado (SHOP0_LOG_FILE).

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="conecta_shop0")
    logger = get_logger(__name__)
    logger.info("webhook_registered", extra={"topic": "ORDERS_CREATE"})

Nunca logar segredos, tokens ou payloads de webhook.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pythonjsonlogger.json import JsonFormatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "conecta_shop0"

# Logger dos avisos X-Shop0-API-Deprecated-Reason
DEPRECATION_LOGGER_NAME = "shop0.deprecations"

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record.

    correlation_id passado explicitamente via `extra` tem precedência.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com os campos obrigatórios renomeados."""
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    deprecation_log_file: str | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Deve ser chamada uma vez no composition root (app/bootstrap/).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
        deprecation_log_file: Arquivo onde avisos de depreciação são
            anexados, além do stream padrão.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    context_filter = CorrelationIdFilter(service_name, correlation_id_getter)

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(context_filter)

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]

    deprecation_logger = logging.getLogger(DEPRECATION_LOGGER_NAME)
    deprecation_logger.handlers = []
    if deprecation_log_file:
        file_handler = logging.FileHandler(deprecation_log_file, encoding="utf-8")
        file_handler.setFormatter(create_json_formatter())
        file_handler.addFilter(context_filter)
        deprecation_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado (geralmente __name__)."""
    return logging.getLogger(name)
