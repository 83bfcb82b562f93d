"""Webhooks Shop0: registro de assinaturas, verificação e despacho."""

from .models import (
    DOMAIN_HEADER,
    HMAC_HEADER,
    TOPIC_HEADER,
    WEBHOOK_ID_HEADER,
    DeliveryMethod,
    RegisterOptions,
    RegisterReturn,
    WebhookRegistryEntry,
)
from .queries import build_check_query, build_query
from .registry import WebhookRegistry, normalize_topic

__all__ = [
    "DOMAIN_HEADER",
    "HMAC_HEADER",
    "TOPIC_HEADER",
    "WEBHOOK_ID_HEADER",
    "DeliveryMethod",
    "RegisterOptions",
    "RegisterReturn",
    "WebhookRegistry",
    "WebhookRegistryEntry",
    "build_check_query",
    "build_query",
    "normalize_topic",
]
