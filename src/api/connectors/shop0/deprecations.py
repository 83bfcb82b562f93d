"""Rastreamento de avisos de depreciação da Admin API.

A Shop0 sinaliza features em vias de remoção via header
X-Shop0-API-Deprecated-Reason. O mesmo aviso (mensagem + path) é logado
no máximo uma vez por janela de supressão, por instância de cliente.
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from typing import TYPE_CHECKING

from config.logging import DEPRECATION_LOGGER_NAME

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(DEPRECATION_LOGGER_NAME)

DEPRECATION_HEADER = "X-Shop0-API-Deprecated-Reason"

# 5 minutos
DEPRECATION_ALERT_DELAY_SECONDS = 300.0


def deprecation_hash(message: str, path: str) -> str:
    """Hash de conteúdo (MD5) do par mensagem/path."""
    payload = json.dumps({"message": message, "path": path})
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


class DeprecationTracker:
    """Cache de avisos já emitidos: hash -> timestamp da última emissão."""

    def __init__(
        self,
        alert_delay_seconds: float = DEPRECATION_ALERT_DELAY_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._alert_delay_seconds = alert_delay_seconds
        self._clock = clock
        self._logged: dict[str, float] = {}

    def notify(self, message: str, path: str) -> bool:
        """Registra um aviso e loga se inédito ou fora da janela.

        Returns:
            True se o aviso foi emitido, False se suprimido.
        """
        key = deprecation_hash(message, path)
        now = self._clock()
        last_logged = self._logged.get(key)
        if last_logged is not None and now - last_logged < self._alert_delay_seconds:
            return False

        self._logged[key] = now
        logger.warning(
            "api_deprecation_notice",
            extra={"deprecation_message": message, "path": path},
        )
        return True
