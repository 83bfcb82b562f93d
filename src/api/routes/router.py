"""Agregador de rotas.

Webhooks da Shop0 não passam pelo roteamento FastAPI: os paths são
dinâmicos (definidos em `register`) e são interceptados pelo
WebhookMiddleware.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados."""
    api_router = APIRouter()
    api_router.include_router(health_router, tags=["health"])
    return api_router
