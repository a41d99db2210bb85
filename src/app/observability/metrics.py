"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente por sistemas como BigQuery, CloudWatch Insights, etc.

Métricas suportadas:
- Latência: histogram de tempos de execução por componente/operação
- Verificação: counter de vereditos por receiver e motivo

Uso:
    from app.observability.metrics import record_latency, record_verification

    start = time.perf_counter()
    # ... operação ...
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("security_verifier", "verify", latency_ms, correlation_id)

    record_verification("github", "default", "rejected", "invalid_signature")
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "security_verifier")
        operation: Nome da operação (ex: "verify")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_verification(
    receiver: str | None,
    configuration_id: str | None,
    outcome: str,
    reason: str | None = None,
    correlation_id: str | None = None,
) -> None:
    """Registra veredito de verificação (nunca secrets ou valores recebidos).

    Args:
        receiver: Nome do receiver
        configuration_id: Id de configuração usado no lookup
        outcome: "accepted", "rejected" ou "short_circuited"
        reason: Motivo da rejeição
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_verification",
        extra={
            "metric_type": "verification",
            "receiver": receiver,
            "configuration_id": configuration_id,
            "outcome": outcome,
            "reason": reason,
            "correlation_id": correlation_id,
        },
    )
