"""Queries e mutations GraphQL de assinaturas de webhook."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from api.connectors.shop0.webhook.models import (
    DeliveryMethod,
    WebhookCheckResponse,
    WebhookMutationPayload,
    WebhookSubscriptionNode,
)
from config.settings import ApiVersion, version_compatible
from utils.errors import HttpRequestError, UnsupportedDeliveryMethodError

# Campo `endpoint` (e EventBridge) disponível a partir de 2020-07
ENDPOINT_FIELD_VERSION = ApiVersion.JULY20

# (método de entrega, é update) -> nome da mutation
MUTATION_NAMES: dict[tuple[DeliveryMethod, bool], str] = {
    (DeliveryMethod.HTTP, False): "webhookSubscriptionCreate",
    (DeliveryMethod.HTTP, True): "webhookSubscriptionUpdate",
    (DeliveryMethod.EVENT_BRIDGE, False): "eventBridgeWebhookSubscriptionCreate",
    (DeliveryMethod.EVENT_BRIDGE, True): "eventBridgeWebhookSubscriptionUpdate",
}

_ENDPOINT_ARGUMENT: dict[DeliveryMethod, str] = {
    DeliveryMethod.HTTP: "callbackUrl",
    DeliveryMethod.EVENT_BRIDGE: "arn",
}


def supports_endpoint_field(api_version: ApiVersion) -> bool:
    return version_compatible(ENDPOINT_FIELD_VERSION, api_version)


def validate_delivery_method(
    delivery_method: DeliveryMethod,
    api_version: ApiVersion,
) -> None:
    """Garante que a versão de API ativa suporta o método de entrega.

    Raises:
        UnsupportedDeliveryMethodError: EventBridge antes de 2020-07
    """
    if delivery_method is DeliveryMethod.EVENT_BRIDGE and not supports_endpoint_field(
        api_version
    ):
        raise UnsupportedDeliveryMethodError(
            f'EventBridge webhooks are not supported in API version "{api_version.value}".'
        )


def build_check_query(topic: str, api_version: ApiVersion) -> str:
    """Query da primeira assinatura existente para o tópico."""
    if supports_endpoint_field(api_version):
        node_fields = """
          id
          endpoint {
            __typename
            ... on WebhookHttpEndpoint {
              callbackUrl
            }
            ... on WebhookEventBridgeEndpoint {
              arn
            }
          }"""
    else:
        node_fields = """
          id
          callbackUrl"""

    return f"""{{
      webhookSubscriptions(first: 1, topics: {topic}) {{
        edges {{
          node {{{node_fields}
          }}
        }}
      }}
    }}"""


def mutation_name(delivery_method: DeliveryMethod, webhook_id: str | None) -> str:
    return MUTATION_NAMES[(delivery_method, webhook_id is not None)]


def build_query(
    topic: str,
    address: str,
    api_version: ApiVersion,
    delivery_method: DeliveryMethod = DeliveryMethod.HTTP,
    webhook_id: str | None = None,
) -> str:
    """Mutation de criação (sem id) ou atualização (com id)."""
    validate_delivery_method(delivery_method, api_version)

    if webhook_id is not None:
        identifier = f"id: {json.dumps(webhook_id)}"
    else:
        identifier = f"topic: {topic}"

    argument = _ENDPOINT_ARGUMENT[delivery_method]
    subscription_args = f"{{{argument}: {json.dumps(address)}}}"

    return f"""
    mutation webhookSubscription {{
      {mutation_name(delivery_method, webhook_id)}({identifier}, webhookSubscription: {subscription_args}) {{
        userErrors {{
          field
          message
        }}
        webhookSubscription {{
          id
        }}
      }}
    }}
    """


def parse_check_response(body: Any) -> WebhookSubscriptionNode | None:
    """Extrai a assinatura existente (ou None) da resposta da consulta.

    Raises:
        HttpRequestError: Se a resposta não tem o formato esperado
    """
    try:
        return WebhookCheckResponse.model_validate(body).first_node
    except ValidationError as exc:
        raise HttpRequestError(
            "Unexpected response when checking webhook subscriptions"
        ) from exc


def parse_mutation_result(
    body: Any,
    delivery_method: DeliveryMethod,
    webhook_id: str | None,
) -> WebhookMutationPayload | None:
    """Parseia o payload da mutation esperada; None se ausente ou inválido."""
    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, dict):
        return None

    payload = data.get(mutation_name(delivery_method, webhook_id))
    if not isinstance(payload, dict):
        return None

    try:
        return WebhookMutationPayload.model_validate(payload)
    except ValidationError:
        return None
