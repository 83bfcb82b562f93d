"""Validação de domínios de loja ({loja}.myshop0.com|io)."""

from __future__ import annotations

import re

from config.settings.shop0 import SHOP_DOMAIN_SUFFIX

_LABEL = r"[a-zA-Z0-9][a-zA-Z0-9-]*"

SHOP_DOMAIN_PATTERN = re.compile(
    rf"{_LABEL}(?:\.{_LABEL})*\.{SHOP_DOMAIN_SUFFIX}\.(?:com|io)/*"
)


def validate_shop(shop: str) -> bool:
    """Retorna True se `shop` é um domínio de loja válido, sem path/query."""
    return bool(SHOP_DOMAIN_PATTERN.fullmatch(shop))
