"""Entrypoint da aplicação Conecta_Shop0.

Expõe a aplicação ASGI (FastAPI) com o middleware de webhooks.

Uso:
    uvicorn app.app:app --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from api.routes.shop0.webhook import WebhookMiddleware
from app.bootstrap import create_webhook_registry, initialize_app, validate_runtime_settings
from config.logging import get_logger
from config.settings import LIBRARY_VERSION, get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from api.connectors.shop0.webhook.registry import WebhookRegistry

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Valida settings no startup."""
    logger.info("app_starting", extra={"service": "conecta-shop0"})
    validate_runtime_settings()
    yield
    logger.info("app_shutting_down", extra={"service": "conecta-shop0"})


def create_app(registry: WebhookRegistry | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        registry: Registro de webhooks compartilhado. Se None, cria um
            a partir das settings do ambiente.
    """
    webhook_registry = registry or create_webhook_registry()

    fastapi_app = FastAPI(
        title="Conecta_Shop0",
        description="Integração com a Admin API e webhooks da Shop0",
        version=LIBRARY_VERSION,
        lifespan=lifespan,
    )
    fastapi_app.state.webhook_registry = webhook_registry
    fastapi_app.add_middleware(WebhookMiddleware, registry=webhook_registry)
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": "conecta-shop0"})
    return fastapi_app


app = create_app()


def main() -> None:
    """Entrypoint para execução direta."""
    import uvicorn

    base = get_base_settings()
    uvicorn.run("app.app:app", host=base.host, port=base.port, reload=base.reload)


if __name__ == "__main__":
    main()
