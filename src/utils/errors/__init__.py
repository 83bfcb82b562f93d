"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    HandlerFailedError,
    HttpInternalError,
    HttpMaxRetriesError,
    HttpRequestError,
    HttpResponseError,
    HttpRetriableError,
    HttpThrottlingError,
    InvalidConfigurationError,
    InvalidHmacError,
    InvalidShopError,
    InvalidWebhookError,
    MissingRequiredArgumentError,
    MissingRequiredHeaderError,
    NoHandlerRegisteredError,
    Shop0Error,
    SignatureMismatchError,
    UnsupportedDeliveryMethodError,
)

__all__ = [
    "HandlerFailedError",
    "HttpInternalError",
    "HttpMaxRetriesError",
    "HttpRequestError",
    "HttpResponseError",
    "HttpRetriableError",
    "HttpThrottlingError",
    "InvalidConfigurationError",
    "InvalidHmacError",
    "InvalidShopError",
    "InvalidWebhookError",
    "MissingRequiredArgumentError",
    "MissingRequiredHeaderError",
    "NoHandlerRegisteredError",
    "Shop0Error",
    "SignatureMismatchError",
    "UnsupportedDeliveryMethodError",
]
