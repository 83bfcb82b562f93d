"""Middleware ASGI de entrega de webhooks Shop0.

POSTs cujo path pertence a um handler registrado são entregues ao
WebhookRegistry; o status HTTP já foi escrito quando `process` termina,
então aqui apenas registramos o desfecho nos logs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.requests import Request

from api.connectors.shop0.webhook.models import TOPIC_HEADER, WEBHOOK_ID_HEADER
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from utils.errors import HandlerFailedError, Shop0Error

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send

    from api.connectors.shop0.webhook.registry import WebhookRegistry

logger = logging.getLogger(__name__)


class WebhookMiddleware:
    """Desvia entregas de webhook para o registro antes do roteamento."""

    def __init__(self, app: ASGIApp, registry: WebhookRegistry) -> None:
        self.app = app
        self.registry = registry

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if not self._is_delivery(scope):
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        token = set_correlation_id(request.headers.get(WEBHOOK_ID_HEADER))
        try:
            await self._process(request, send)
        finally:
            reset_correlation_id(token)

    def _is_delivery(self, scope: Scope) -> bool:
        return (
            scope["type"] == "http"
            and scope.get("method") == "POST"
            and self.registry.is_webhook_path(scope.get("path", ""))
        )

    async def _process(self, request: Request, send: Send) -> None:
        extra = {
            "correlation_id": get_correlation_id(),
            "path": request.url.path,
            "topic": request.headers.get(TOPIC_HEADER),
        }
        try:
            await self.registry.process(request, send)
        except HandlerFailedError as exc:
            logger.error(
                "webhook_handler_failed",
                extra={**extra, "error_type": type(exc.original_error).__name__},
            )
        except Shop0Error as exc:
            logger.warning(
                "webhook_rejected",
                extra={**extra, "error_type": type(exc).__name__, "error": str(exc)},
            )
        else:
            logger.info("webhook_processed", extra=extra)
