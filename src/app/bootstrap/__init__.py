"""Bootstrap da aplicação — composition root.

Configura logging, valida settings e cria as instâncias compartilhadas
(o WebhookRegistry é criado aqui e repassado por referência; não existe
registro global).

Uso:
    from app.bootstrap import create_webhook_registry, initialize_app

    initialize_app()
    registry = create_webhook_registry()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.shop0.webhook.registry import WebhookRegistry
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_shop0_settings
from utils.errors import InvalidConfigurationError

if TYPE_CHECKING:
    from config.settings import Shop0Settings

SERVICE_NAME = "conecta_shop0"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    base = get_base_settings()
    shop0 = get_shop0_settings()

    configure_logging(
        level=base.log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
        deprecation_log_file=shop0.log_file or None,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido; em `development` apenas alerta.

    Raises:
        InvalidConfigurationError: Settings inválidas em ambiente estrito
    """
    environment = get_base_settings().environment
    errors = [f"shop0: {error}" for error in get_shop0_settings().validate()]
    errors.extend(f"base: {error}" for error in get_base_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if environment in STRICT_VALIDATION_ENVS:
        details = "\n".join(f"- {error}" for error in errors)
        raise InvalidConfigurationError(
            f"Cannot initialize Shop0 API Library for {environment}:\n{details}"
        )


def create_webhook_registry(settings: Shop0Settings | None = None) -> WebhookRegistry:
    """Cria o registro de webhooks da aplicação."""
    return WebhookRegistry(settings or get_shop0_settings())
