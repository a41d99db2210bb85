"""Veredito de autenticidade produzido pelo verificador de segurança."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class RejectionReason(StrEnum):
    """Motivos de rejeição (todos terminais para a tentativa de entrega)."""

    NOT_FOUND = "not_found"
    NOT_CONFIGURED = "not_configured"
    INVALID_CODE = "invalid_code"
    INVALID_SIGNATURE = "invalid_signature"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """Resultado da verificação.

    Attributes:
        accepted: True se o request foi aceito (ou desviado para o GET challenge)
        reason: Motivo da rejeição quando accepted=False
        short_circuited: GET entregue ao protocolo de challenge do receiver
    """

    accepted: bool
    reason: RejectionReason | None = None
    short_circuited: bool = False

    @classmethod
    def accept(cls) -> VerificationResult:
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: RejectionReason) -> VerificationResult:
        return cls(accepted=False, reason=reason)

    @classmethod
    def short_circuit(cls) -> VerificationResult:
        return cls(accepted=True, short_circuited=True)
