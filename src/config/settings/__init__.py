"""Agregador de settings do Conecta_Shop0.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.shop0 import (
    LATEST_API_VERSION,
    LIBRARY_NAME,
    LIBRARY_VERSION,
    ApiVersion,
    Shop0Settings,
    get_shop0_settings,
    version_compatible,
)

__all__ = [
    # Constants
    "LATEST_API_VERSION",
    "LIBRARY_NAME",
    "LIBRARY_VERSION",
    # Base
    "ApiVersion",
    "BaseSettings",
    "Environment",
    "Shop0Settings",
    "get_base_settings",
    "get_shop0_settings",
    "version_compatible",
]
