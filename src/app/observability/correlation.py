"""correlation_id por request de webhook.

Cada entrega recebe um id propagado para todos os logs do request.
Senders que já enviam um id de entrega têm esse valor reaproveitado,
o que permite cruzar nossos logs com o painel do sender.

Uso:
    token = set_correlation_id(resolve_correlation_id(request.headers))
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

# Ordem de preferência: id explícito do chamador, depois ids de entrega
CORRELATION_HEADERS = (
    "x-correlation-id",
    "x-request-id",
    "x-github-delivery",
)

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio fora de request)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id do contexto; None gera um UUID novo.

    Returns:
        Token para reset_correlation_id().
    """
    return _correlation_id.set(correlation_id or str(uuid.uuid4()))


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def resolve_correlation_id(headers: Mapping[str, str]) -> str | None:
    """Escolhe o correlation_id a partir dos headers do request.

    Args:
        headers: Headers do request (case-insensitive no Starlette)

    Returns:
        Primeiro header de CORRELATION_HEADERS não vazio, ou None.
    """
    for name in CORRELATION_HEADERS:
        value = headers.get(name)
        if value and value.strip():
            return value.strip()
    return None
