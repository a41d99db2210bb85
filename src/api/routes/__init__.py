"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (receivers de webhook, health)
- Validação inicial de request (tamanho, Content-Type)
- Delegação para o verificador e extração de eventos
- Respostas HTTP apropriadas

Estrutura:
- routes/webhooks/: endpoints genéricos por receiver
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
