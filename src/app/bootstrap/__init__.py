"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, carrega a
configuração de receivers e conecta implementações concretas.

Uso:
    from app.bootstrap import initialize_app, get_webhook_runtime

    # Na inicialização do serviço
    initialize_app()

    runtime = get_webhook_runtime()
    result = await runtime.verifier.verify(request, context)
"""

from __future__ import annotations

import logging
from functools import lru_cache

from app.bootstrap.receivers_factory import (
    WebhookRuntime,
    create_webhook_runtime,
    validate_secret_key_lengths,
)
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_webhook_settings

# Nome do serviço para logs e métricas
SERVICE_NAME = "portal_webhooks"

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.

    Configura:
    - Logging estruturado JSON com correlation_id
    """
    configure_logging(
        level=get_base_settings().log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (logging em DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
    )


@lru_cache(maxsize=1)
def get_webhook_runtime() -> WebhookRuntime:
    """Obtém runtime dos receivers (singleton).

    Raises:
        WebhookConfigurationError: Se a configuração for inválida.
    """
    return create_webhook_runtime(get_webhook_settings())


def validate_runtime_settings(runtime: WebhookRuntime | None = None) -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base_settings = get_base_settings()
    environment = base_settings.environment
    strict_mode = base_settings.is_strict
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base_settings.validate())

    webhook_settings = runtime.settings if runtime is not None else get_webhook_settings()
    errors.extend(f"webhooks: {error}" for error in webhook_settings.validate())

    if runtime is not None:
        errors.extend(f"secrets: {error}" for error in validate_secret_key_lengths(runtime))
        if not runtime.active_receivers():
            errors.append("secrets: nenhum receiver com secretKey configurado")

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


__all__ = [
    "SERVICE_NAME",
    "WebhookRuntime",
    "get_webhook_runtime",
    "initialize_app",
    "initialize_test_app",
    "validate_runtime_settings",
]
