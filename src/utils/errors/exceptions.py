"""Taxonomia de erros da integração Shop0.

Hierarquia fechada, compartilhada entre o cliente HTTP e o registro de
webhooks. Apenas subclasses de HttpRetriableError disparam nova tentativa.
"""

from __future__ import annotations


class Shop0Error(Exception):
    """Base para todas as falhas da integração Shop0."""


# ── HTTP ──────────────────────────────────────────────────────────────────────


class HttpRetriableError(Shop0Error):
    """Marcador: falha transitória, elegível para retry."""


class HttpThrottlingError(HttpRetriableError):
    """429 — a Shop0 está limitando requisições."""

    def __init__(self, message: str, retry_after: float | None = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class HttpInternalError(HttpRetriableError):
    """5xx — erro interno da Shop0."""


class HttpResponseError(Shop0Error):
    """Resposta não-2xx sem retry (4xx exceto 429)."""

    def __init__(self, message: str, code: int, status_text: str) -> None:
        super().__init__(message)
        self.code = code
        self.status_text = status_text


class HttpRequestError(Shop0Error):
    """Falha de transporte ou parsing antes de obter status."""


class HttpMaxRetriesError(Shop0Error):
    """Orçamento de tentativas esgotado em erro retentável."""


# ── Configuração ──────────────────────────────────────────────────────────────


class InvalidConfigurationError(Shop0Error):
    """Argumentos ou configuração inválidos no ponto de chamada."""


class InvalidShopError(InvalidConfigurationError):
    """Domínio de loja fora do padrão {loja}.myshop0.(com|io)."""


class MissingRequiredArgumentError(InvalidConfigurationError):
    """Argumento obrigatório ausente (ex: access token, query vazia)."""


class UnsupportedDeliveryMethodError(InvalidConfigurationError):
    """Método de entrega não suportado pela versão de API ativa."""


# ── Assinaturas / webhooks ────────────────────────────────────────────────────


class InvalidHmacError(Shop0Error):
    """Query de callback OAuth sem valor de hmac."""


class InvalidWebhookError(Shop0Error):
    """Base para falhas no processamento de webhooks recebidos."""


class MissingRequiredHeaderError(InvalidWebhookError):
    """Body vazio ou headers obrigatórios ausentes (HTTP 400)."""


class SignatureMismatchError(InvalidWebhookError):
    """HMAC do body não confere com o header recebido (HTTP 403)."""


class NoHandlerRegisteredError(InvalidWebhookError):
    """Nenhum handler registrado para o tópico (HTTP 403)."""


class HandlerFailedError(InvalidWebhookError):
    """Handler do tópico levantou exceção (HTTP 500)."""

    def __init__(self, message: str, original_error: BaseException) -> None:
        super().__init__(message)
        self.original_error = original_error
