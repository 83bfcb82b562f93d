"""Conector Shop0 - adapter de borda para a Admin API.

Único ponto de IO com a plataforma:
- Cliente HTTP resiliente (retry, classificação de falhas, depreciações)
- Cliente GraphQL autenticado
- Assinatura HMAC (webhooks e callbacks OAuth)
- Registro e despacho de webhooks
"""

from .graphql_client import GraphqlClient
from .http_base import HttpClientConfig
from .http_client import Shop0HttpClient, create_shop0_http_client, http_config_from_settings
from .models import DataType, Method, RequestSpec, ResponseResult
from .shop_validator import validate_shop
from .signature import safe_compare, sign, sign_base64, stringify_query, validate_hmac

__all__ = [
    "DataType",
    "GraphqlClient",
    "HttpClientConfig",
    "Method",
    "RequestSpec",
    "ResponseResult",
    "Shop0HttpClient",
    "create_shop0_http_client",
    "http_config_from_settings",
    "safe_compare",
    "sign",
    "sign_base64",
    "stringify_query",
    "validate_hmac",
    "validate_shop",
]
