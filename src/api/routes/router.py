"""Agregador de rotas — registra health e receivers de webhook.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.webhooks import router as webhooks_router
from config.settings import DEFAULT_ROUTE_PREFIX


def create_api_router(route_prefix: str = DEFAULT_ROUTE_PREFIX) -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Args:
        route_prefix: Prefixo dos endpoints de receivers.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    api_router.include_router(
        webhooks_router,
        prefix=route_prefix,
        tags=["webhooks"],
    )

    return api_router
