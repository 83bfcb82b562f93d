"""Protocolos e contratos do core da aplicação."""

from .http_client import GraphqlClientProtocol, GraphqlResultProtocol

__all__ = [
    "GraphqlClientProtocol",
    "GraphqlResultProtocol",
]
