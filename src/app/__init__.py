"""App — composição e infraestrutura do serviço.

Subpastas:
- bootstrap/: composition root (logging, settings, WebhookRegistry)
- protocols/: contratos/interfaces
- observability/: correlation_id para logs estruturados

Padrão: app compõe; api adapta; config parametriza; utils apoia.
"""
