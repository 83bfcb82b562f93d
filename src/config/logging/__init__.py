"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="conecta_shop0")
    logger = get_logger(__name__)

Campos obrigatórios em todo log: correlation_id, service, level, logger,
message, asctime.
"""

from config.logging.config import (
    DEPRECATION_LOGGER_NAME,
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
)

__all__ = [
    "DEPRECATION_LOGGER_NAME",
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
]
