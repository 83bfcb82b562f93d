"""Connectors — adapters de borda para APIs externas.

- shop0/: Admin API e webhooks da Shop0
"""

__all__: list[str] = []
