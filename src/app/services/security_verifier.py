"""Verificador de autenticidade de webhooks.

Máquina de estados por request com estados terminais Accepted/Rejected:

1. Receiver não registrado → Rejected(not_found)
2. GET em receiver com short-circuit → entregue ao protocolo de challenge
3. Sem secrets para (receiver, id) → Rejected(not_configured)
4. Código estático: query `code` comparado com todas as chaves
5. Assinatura: corpo bufferizado + HMAC por chave, comparação constante
6. Sem estratégia → Accepted

Falhas vindas do request nunca levantam exceção: viram VerificationResult.
Logs levam receiver/id/motivo, nunca secrets ou valores recebidos.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from starlette.requests import ClientDisconnect

from app.constants.webhooks import CODE_QUERY_PARAMETER, DEFAULT_ID_CONFIGURATION_KEY
from app.domain.receivers import (
    RouteContext,
    SecretKeySet,
    SignatureScheme,
    VerificationStrategy,
)
from app.domain.verification import RejectionReason, VerificationResult
from app.infra.crypto.signature import (
    is_timestamp_within_tolerance,
    matches_any_code,
    matches_any_key,
    parse_signature_header,
)
from app.observability import get_correlation_id, record_latency, record_verification

if TYPE_CHECKING:
    from collections.abc import Callable

    from starlette.requests import Request

    from app.services.metadata_registry import ReceiverMetadataRegistry
    from app.services.secret_keys import SecretKeyLookup

logger = logging.getLogger(__name__)


class WebhookSecurityVerifier:
    """Aplica a estratégia de verificação declarada pelo receiver.

    Args:
        registry: Registro de metadata dos receivers
        secret_keys: Lookup de secrets por (receiver, id)
        clock: Fonte de tempo (epoch seconds) para janelas de timestamp
    """

    def __init__(
        self,
        registry: ReceiverMetadataRegistry,
        secret_keys: SecretKeyLookup,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._registry = registry
        self._secret_keys = secret_keys
        self._clock = clock

    async def verify(self, request: Request, context: RouteContext) -> VerificationResult:
        """Decide a autenticidade do request.

        Args:
            request: Request do host (corpo é bufferizado e fica em cache)
            context: Contexto de rota já tipado

        Returns:
            VerificationResult terminal.
        """
        started = time.perf_counter()
        result = await self._verify(request, context)
        self._log_result(context, result)
        record_latency(
            "security_verifier",
            "verify",
            (time.perf_counter() - started) * 1000,
            get_correlation_id(),
        )
        return result

    async def _verify(self, request: Request, context: RouteContext) -> VerificationResult:
        metadata = self._registry.find_metadata(context.receiver_name)
        if metadata is None:
            return VerificationResult.reject(RejectionReason.NOT_FOUND)

        if metadata.short_circuit_get_requests and request.method == "GET":
            return VerificationResult.short_circuit()

        strategy = metadata.strategy
        if strategy is VerificationStrategy.NONE:
            return VerificationResult.accept()

        keys = self._secret_keys.get_secret_keys(metadata.name, context.configuration_id)
        if keys is None:
            return VerificationResult.reject(RejectionReason.NOT_CONFIGURED)

        if strategy is VerificationStrategy.STATIC_CODE:
            return self._verify_code(request, keys)
        return await self._verify_signature(request, metadata.signature, keys)

    def _verify_code(self, request: Request, keys: SecretKeySet) -> VerificationResult:
        code = request.query_params.get(CODE_QUERY_PARAMETER)
        if not code or not matches_any_code(keys, code):
            return VerificationResult.reject(RejectionReason.INVALID_CODE)
        return VerificationResult.accept()

    async def _verify_signature(
        self,
        request: Request,
        scheme: SignatureScheme | None,
        keys: SecretKeySet,
    ) -> VerificationResult:
        if scheme is None:
            return VerificationResult.reject(RejectionReason.INVALID_SIGNATURE)

        try:
            body = await request.body()
        except ClientDisconnect:
            return VerificationResult.reject(RejectionReason.CANCELLED)

        parsed = parse_signature_header(scheme, request.headers.get(scheme.header_name))
        if parsed is None:
            return VerificationResult.reject(RejectionReason.INVALID_SIGNATURE)

        if not is_timestamp_within_tolerance(scheme, parsed.timestamp, self._clock()):
            return VerificationResult.reject(RejectionReason.INVALID_SIGNATURE)

        if not matches_any_key(scheme, keys, body, parsed):
            return VerificationResult.reject(RejectionReason.INVALID_SIGNATURE)
        return VerificationResult.accept()

    def _log_result(self, context: RouteContext, result: VerificationResult) -> None:
        configuration_id = context.configuration_id or DEFAULT_ID_CONFIGURATION_KEY
        correlation_id = get_correlation_id()
        if result.short_circuited:
            outcome = "short_circuited"
        elif result.accepted:
            outcome = "accepted"
        else:
            outcome = "rejected"

        reason = result.reason.value if result.reason else None
        record_verification(
            context.receiver_name,
            configuration_id,
            outcome,
            reason,
            correlation_id,
        )
        if result.accepted:
            logger.info(
                "webhook_verified",
                extra={
                    "receiver": context.receiver_name,
                    "configuration_id": configuration_id,
                    "short_circuited": result.short_circuited,
                    "correlation_id": correlation_id,
                },
            )
            return
        logger.warning(
            "webhook_rejected",
            extra={
                "receiver": context.receiver_name,
                "configuration_id": configuration_id,
                "reason": reason,
                "correlation_id": correlation_id,
            },
        )
