"""Registro de webhooks Shop0: assinatura remota idempotente e despacho.

`register` consulta a assinatura existente antes de escrever; com endpoint
inalterado nenhuma mutation é emitida. `process` verifica o HMAC do body
bruto e despacha para o handler do tópico, escrevendo exatamente uma
resposta antes de sinalizar falha.

Concorrência: `register` para o MESMO tópico não deve ser chamado em
paralelo. A sequência consulta -> mutation não é atômica; duas chamadas
concorrentes podem ambas criar a assinatura e a última a terminar define
a entrada local.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

from starlette import status
from starlette.responses import Response

from api.connectors.shop0.graphql_client import GraphqlClient
from api.connectors.shop0.signature import safe_compare, sign_base64
from api.connectors.shop0.webhook.models import (
    DOMAIN_HEADER,
    HMAC_HEADER,
    TOPIC_HEADER,
    DeliveryMethod,
    RegisterOptions,
    RegisterReturn,
    WebhookRegistryEntry,
)
from api.connectors.shop0.webhook.queries import (
    build_check_query,
    build_query,
    parse_check_response,
    parse_mutation_result,
    validate_delivery_method,
)
from utils.errors import (
    HandlerFailedError,
    InvalidWebhookError,
    MissingRequiredHeaderError,
    NoHandlerRegisteredError,
    SignatureMismatchError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from starlette.requests import Request
    from starlette.types import Send

    from app.protocols.http_client import GraphqlClientProtocol
    from config.settings import Shop0Settings

logger = logging.getLogger(__name__)


def normalize_topic(topic: str) -> str:
    """orders/create -> ORDERS_CREATE."""
    return topic.upper().replace("/", "_")


class WebhookRegistry:
    """Registro de handlers de webhook, um por tópico.

    Instância explícita, criada no composition root e compartilhada com
    quem registra webhooks e com o middleware que chama `process`.
    """

    def __init__(
        self,
        settings: Shop0Settings,
        client_factory: Callable[[str, str | None], GraphqlClientProtocol] | None = None,
    ) -> None:
        self._settings = settings
        self._client_factory = client_factory or self._create_client
        self._entries: list[WebhookRegistryEntry] = []

    @property
    def settings(self) -> Shop0Settings:
        return self._settings

    @property
    def entries(self) -> tuple[WebhookRegistryEntry, ...]:
        return tuple(self._entries)

    def get_entry(self, topic: str) -> WebhookRegistryEntry | None:
        for entry in self._entries:
            if entry.topic == topic:
                return entry
        return None

    def is_webhook_path(self, path: str) -> bool:
        """True se algum handler registrado escuta exatamente `path`."""
        return any(entry.path == path for entry in self._entries)

    async def register(self, options: RegisterOptions) -> RegisterReturn:
        """Registra (ou confirma) a assinatura remota e o handler local.

        Raises:
            UnsupportedDeliveryMethodError: Método incompatível com a versão
            MissingRequiredArgumentError: Access token ausente (app público)
            Shop0Error: Falhas HTTP da consulta ou da mutation
        """
        api_version = self._settings.api_version
        validate_delivery_method(options.delivery_method, api_version)

        client = self._client_factory(options.shop, options.access_token)
        address = self._delivery_address(options)

        check = await client.query(build_check_query(options.topic, api_version))
        existing = parse_check_response(check.body)
        webhook_id = existing.id if existing is not None else None

        if existing is not None and existing.address == address:
            logger.info(
                "webhook_already_registered",
                extra={"topic": options.topic, "delivery_method": options.delivery_method.value},
            )
            self._commit(options)
            return RegisterReturn(success=True, result={})

        result = await client.query(
            build_query(
                options.topic,
                address,
                api_version,
                delivery_method=options.delivery_method,
                webhook_id=webhook_id,
            )
        )
        payload = parse_mutation_result(result.body, options.delivery_method, webhook_id)
        success = payload is not None and payload.succeeded

        if success:
            self._commit(options)
            logger.info(
                "webhook_registered",
                extra={
                    "topic": options.topic,
                    "delivery_method": options.delivery_method.value,
                    "operation": "update" if webhook_id else "create",
                },
            )
        else:
            logger.warning(
                "webhook_registration_failed",
                extra={
                    "topic": options.topic,
                    "user_errors": len(payload.user_errors) if payload else None,
                },
            )

        return RegisterReturn(success=success, result=result.body)

    async def process(self, request: Request, send: Send) -> None:
        """Verifica e despacha uma entrega de webhook.

        Escreve exatamente um status em `send` (200, 400, 403 ou 500) e só
        então levanta o erro correspondente, se houver.

        Raises:
            MissingRequiredHeaderError: Body vazio ou headers ausentes (400)
            SignatureMismatchError: HMAC inválido (403)
            NoHandlerRegisteredError: Tópico sem handler (403)
            HandlerFailedError: Handler levantou exceção (500)
        """
        raw_body = b""
        async for chunk in request.stream():
            raw_body += chunk

        status_code, error = await self._dispatch(raw_body, request.headers)

        response = Response(status_code=status_code)
        await response(request.scope, request.receive, send)

        if error is not None:
            raise error

    async def _dispatch(
        self,
        raw_body: bytes,
        headers: Mapping[str, str],
    ) -> tuple[int, InvalidWebhookError | None]:
        if not raw_body:
            return status.HTTP_400_BAD_REQUEST, MissingRequiredHeaderError(
                "No body was received when processing webhook"
            )

        hmac_value = headers.get(HMAC_HEADER)
        topic = headers.get(TOPIC_HEADER)
        domain = headers.get(DOMAIN_HEADER)

        missing = [
            name
            for name, value in (
                (HMAC_HEADER, hmac_value),
                (TOPIC_HEADER, topic),
                (DOMAIN_HEADER, domain),
            )
            if not value
        ]
        if missing:
            return status.HTTP_400_BAD_REQUEST, MissingRequiredHeaderError(
                "Missing one or more of the required HTTP headers to process "
                f"webhooks: [{', '.join(missing)}]"
            )

        expected = sign_base64(self._settings.api_secret_key, raw_body)
        if not safe_compare(expected, hmac_value):
            return status.HTTP_403_FORBIDDEN, SignatureMismatchError(
                f"Could not validate request for topic {topic}"
            )

        graphql_topic = normalize_topic(topic)
        entry = self.get_entry(graphql_topic)
        if entry is None:
            return status.HTTP_403_FORBIDDEN, NoHandlerRegisteredError(
                f"No webhook is registered for topic {topic}"
            )

        try:
            result = entry.webhook_handler(
                graphql_topic,
                domain,
                raw_body.decode("utf-8", errors="replace"),
            )
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            error = HandlerFailedError(
                f"Webhook handler for topic {graphql_topic} failed: {exc}",
                original_error=exc,
            )
            error.__cause__ = exc
            return status.HTTP_500_INTERNAL_SERVER_ERROR, error

        return status.HTTP_200_OK, None

    def _commit(self, options: RegisterOptions) -> None:
        # Atribuição única: substitui a entrada do tópico sem suspender
        self._entries = [
            entry for entry in self._entries if entry.topic != options.topic
        ] + [
            WebhookRegistryEntry(
                path=options.path,
                topic=options.topic,
                webhook_handler=options.webhook_handler,
            )
        ]

    def _delivery_address(self, options: RegisterOptions) -> str:
        if options.delivery_method is DeliveryMethod.EVENT_BRIDGE:
            return options.path
        return f"https://{self._settings.host_name}{options.path}"

    def _create_client(self, shop: str, access_token: str | None) -> GraphqlClient:
        return GraphqlClient(shop, self._settings, access_token=access_token)
