"""API — camada de borda e adapters de senders.

Responsabilidades:
- Receber webhooks de senders externos
- Descrever o contrato de segurança de cada sender (connectors/receivers)
- Responder challenges GET
- Mapear vereditos para respostas HTTP

Subpastas:
- connectors/: descriptors e protocolos GET por sender
- routes/: endpoints HTTP (webhooks, health)

NÃO PODE conter: regras de verificação (app/services), IO de configuração.
"""
