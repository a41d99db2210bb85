"""Endpoints de health check."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    detail: dict[str, Any] | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "detail": self.detail,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service="portal-webhooks",
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: registro congelado e ao menos um receiver ativo."""
    receivers_check = _check_receivers(getattr(request.app.state, "webhook_runtime", None))
    ready = receivers_check.status == "ok"

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {"receivers": receivers_check.as_dict()},
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_receivers(runtime: Any | None) -> DependencyCheck:
    if runtime is None:
        return DependencyCheck(status="failed", error="not_configured")
    if not runtime.registry.frozen:
        return DependencyCheck(status="failed", error="registry_not_frozen")
    active = list(runtime.active_receivers())
    detail = {"registered": list(runtime.registry.names), "active": active}
    if not active:
        return DependencyCheck(status="degraded", detail=detail, error="no_active_receivers")
    return DependencyCheck(status="ok", detail=detail)
