"""Endpoints de health check."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import LIBRARY_VERSION, get_shop0_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = LIBRARY_VERSION


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service="conecta-shop0",
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness: settings válidas e registro de webhooks disponível.

    Valida as settings do registro injetado; sem registro, as do ambiente.
    """
    registry = getattr(request.app.state, "webhook_registry", None)
    settings = registry.settings if registry is not None else get_shop0_settings()
    settings_errors = settings.validate()
    ready = not settings_errors and registry is not None

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "settings": {"status": "ok" if not settings_errors else "failed"},
            "webhook_registry": {
                "status": "ok" if registry is not None else "failed",
                "topics": [entry.topic for entry in registry.entries] if registry else [],
            },
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)
