"""Modelos do registro de webhooks Shop0.

Inclui os formatos conhecidos de resposta GraphQL (consulta de assinatura
existente e payload das mutations), parseados com pydantic em vez de
inspeção ad hoc de campos.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Headers do protocolo de entrega de webhooks
HMAC_HEADER = "X-Shop0-Hmac-Sha256"
TOPIC_HEADER = "X-Shop0-Topic"
DOMAIN_HEADER = "X-Shop0-Shop-Domain"
WEBHOOK_ID_HEADER = "X-Shop0-Webhook-Id"

# Handler recebe (tópico normalizado, domínio da loja, body bruto)
WebhookHandler = Callable[[str, str, str], Awaitable[None] | None]


class DeliveryMethod(str, Enum):
    """Transporte usado pela Shop0 para entregar eventos."""

    HTTP = "http"
    EVENT_BRIDGE = "eventbridge"


@dataclass(frozen=True)
class RegisterOptions:
    """Parâmetros de registro de um handler de webhook.

    Attributes:
        path: Path local (HTTP) ou ARN (EventBridge)
        topic: Tópico GraphQL (ex: ORDERS_CREATE)
        shop: Domínio da loja
        webhook_handler: Função chamada a cada entrega do tópico
        access_token: Token da loja (opcional em apps privados)
        delivery_method: Transporte de entrega
    """

    path: str
    topic: str
    shop: str
    webhook_handler: WebhookHandler
    access_token: str | None = None
    delivery_method: DeliveryMethod = DeliveryMethod.HTTP


@dataclass(frozen=True)
class RegisterReturn:
    """Resultado de `register`: sucesso e body bruto da mutation."""

    success: bool
    result: Any


@dataclass(frozen=True)
class WebhookRegistryEntry:
    """Entrada local do registro (única por tópico)."""

    path: str
    topic: str
    webhook_handler: WebhookHandler


# ── Consulta de assinatura existente ─────────────────────────────────────────


class WebhookEndpoint(BaseModel):
    """Endpoint de entrega (formato 2020-07+)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    typename: str = Field(alias="__typename")
    callback_url: str | None = Field(default=None, alias="callbackUrl")
    arn: str | None = None

    @property
    def address(self) -> str:
        if self.typename == "WebhookHttpEndpoint":
            return self.callback_url or ""
        return self.arn or ""


class WebhookSubscriptionNode(BaseModel):
    """Assinatura remota: id e endpoint (atual ou legado)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    endpoint: WebhookEndpoint | None = None
    callback_url: str | None = Field(default=None, alias="callbackUrl")

    @property
    def address(self) -> str:
        if self.endpoint is not None:
            return self.endpoint.address
        return self.callback_url or ""


class _SubscriptionEdge(BaseModel):
    model_config = ConfigDict(extra="ignore")

    node: WebhookSubscriptionNode


class _SubscriptionConnection(BaseModel):
    model_config = ConfigDict(extra="ignore")

    edges: list[_SubscriptionEdge] = Field(default_factory=list)


class _CheckData(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    webhook_subscriptions: _SubscriptionConnection = Field(alias="webhookSubscriptions")


class WebhookCheckResponse(BaseModel):
    """Resposta de `webhookSubscriptions(first: 1, topics: ...)`."""

    model_config = ConfigDict(extra="ignore")

    data: _CheckData

    @property
    def first_node(self) -> WebhookSubscriptionNode | None:
        edges = self.data.webhook_subscriptions.edges
        return edges[0].node if edges else None


# ── Payload das mutations ────────────────────────────────────────────────────


class UserError(BaseModel):
    """Erro de validação reportado pela mutation."""

    model_config = ConfigDict(extra="ignore")

    field: list[str] | None = None
    message: str


class WebhookSubscriptionRef(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str


class WebhookMutationPayload(BaseModel):
    """Payload comum às quatro mutations de assinatura."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    user_errors: list[UserError] = Field(default_factory=list, alias="userErrors")
    webhook_subscription: WebhookSubscriptionRef | None = Field(
        default=None, alias="webhookSubscription"
    )

    @property
    def succeeded(self) -> bool:
        return self.webhook_subscription is not None
