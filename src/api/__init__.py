"""API — camada de borda com a plataforma Shop0.

Subpastas:
- connectors/: cliente HTTP/GraphQL, assinaturas e registro de webhooks
- routes/: health checks e middleware de entrega de webhooks

NÃO PODE conter: composição da aplicação nem leitura direta de env.
"""
