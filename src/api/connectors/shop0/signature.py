"""Assinatura HMAC-SHA256 da Shop0.

Primitiva compartilhada:
- webhooks: base64 do HMAC sobre o body bruto (X-Shop0-Hmac-Sha256)
- callbacks OAuth: hex do HMAC sobre a query canônica (parâmetro hmac)

Comparações sempre em tempo constante.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import TYPE_CHECKING
from urllib.parse import quote, urlencode

from utils.errors import InvalidHmacError

if TYPE_CHECKING:
    from collections.abc import Mapping

# Mesmo conjunto não-escapado que a plataforma usa ao assinar
_QUERY_SAFE_CHARS = "!'()*"


def stringify_query(query: Mapping[str, str | None]) -> str:
    """Monta a query string canônica (chaves ordenadas).

    Chaves com valor None entram com valor vazio.
    """
    ordered = [
        (key, "" if query[key] is None else query[key]) for key in sorted(query)
    ]
    return urlencode(ordered, safe=_QUERY_SAFE_CHARS, quote_via=quote)


def sign(secret: str, canonical: str) -> str:
    """HMAC-SHA256 da string canônica, em hex."""
    return hmac.new(
        secret.encode("utf-8"),
        canonical.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def sign_base64(secret: str, raw_body: bytes) -> str:
    """HMAC-SHA256 do body bruto (não parseado), em base64."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def safe_compare(a: object, b: object) -> bool:
    """Compara duas strings em tempo constante.

    Retorna False (nunca levanta) para tipos inválidos ou qualquer falha.
    """
    if not isinstance(a, str) or not isinstance(b, str):
        return False
    try:
        return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
    except Exception:
        return False


def validate_hmac(query: Mapping[str, str | None], secret: str) -> bool:
    """Valida o hmac de uma query de callback OAuth.

    Args:
        query: Query recebida, incluindo o parâmetro hmac
        secret: Segredo compartilhado do app

    Raises:
        InvalidHmacError: Se a query não contém hmac

    Returns:
        True se o hmac confere com o restante da query
    """
    received = query.get("hmac")
    if not received:
        raise InvalidHmacError("Query does not contain an HMAC value.")

    rest = {key: value for key, value in query.items() if key != "hmac"}
    return safe_compare(received, sign(secret, stringify_query(rest)))
