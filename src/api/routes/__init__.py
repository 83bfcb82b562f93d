"""Rotas HTTP da API.

- health/: health checks e readiness
- shop0/: middleware de entrega de webhooks
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
