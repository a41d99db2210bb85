"""Entrypoint da aplicação Portal_Webhooks.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import (
    WebhookRuntime,
    get_webhook_runtime,
    initialize_app,
    validate_runtime_settings,
)
from config.logging import get_logger
from config.settings import get_webhook_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Carrega configuração e congela o registro de receivers
    - Valida configurações (falha rápido em staging/production)
    """
    logger.info("app_starting", extra={"service": "portal-webhooks"})
    if getattr(app.state, "webhook_runtime", None) is None:
        app.state.webhook_runtime = get_webhook_runtime()
    validate_runtime_settings(app.state.webhook_runtime)

    yield

    logger.info("app_shutting_down", extra={"service": "portal-webhooks"})


def create_app(runtime: WebhookRuntime | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        runtime: Runtime de receivers já montado (testes/embedding). Se None,
            é criado no startup a partir das settings.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="Portal_Webhooks",
        description="Recepção e verificação de webhooks de múltiplos senders",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    fastapi_app.state.webhook_runtime = runtime

    route_prefix = runtime.settings.route_prefix if runtime else get_webhook_settings().route_prefix
    fastapi_app.include_router(create_api_router(route_prefix))

    logger.info("app_configured", extra={"service": "portal-webhooks"})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting Portal_Webhooks in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
