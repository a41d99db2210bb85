"""Observabilidade — logs estruturados, correlation_id, métricas.

Uso:
    from app.observability import get_correlation_id, resolve_correlation_id
    from app.observability import record_latency, record_verification
"""

from app.observability.correlation import (
    get_correlation_id,
    reset_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import record_latency, record_verification

__all__ = [
    "get_correlation_id",
    "record_latency",
    "record_verification",
    "reset_correlation_id",
    "resolve_correlation_id",
    "set_correlation_id",
]
