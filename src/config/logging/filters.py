"""Filters de logging para injeção de contexto e remoção de dados sensíveis.

Campos injetados:
- correlation_id: ID de rastreamento da requisição
- service: Nome do serviço (ex: portal_webhooks)

Campos removidos: qualquer `extra` cujo nome indique secret, assinatura
ou código recebido.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

# Nomes de atributos que nunca podem ser emitidos
SENSITIVE_FIELD_NAMES = frozenset(
    {
        "secret",
        "secrets",
        "secret_key",
        "secret_keys",
        "signature",
        "code",
        "verify_token",
        "authorization",
    }
)

REDACTED = "[REDACTED]"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.

        Returns:
            True sempre (não filtra, apenas enriquece).
        """
        # Preservar correlation_id passado explicitamente via `extra`
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveFieldFilter(logging.Filter):
    """Substitui campos sensíveis do record por "[REDACTED]".

    Args:
        field_names: Nomes (case-insensitive) a redigir.
    """

    def __init__(self, field_names: Iterable[str] = SENSITIVE_FIELD_NAMES) -> None:
        super().__init__()
        self._field_names = frozenset(name.lower() for name in field_names)

    def filter(self, record: logging.LogRecord) -> bool:
        for attribute in list(vars(record)):
            if attribute.lower() in self._field_names:
                setattr(record, attribute, REDACTED)
        return True
