"""Endpoints de recebimento de webhooks por receiver.

Endpoints:
- GET|POST {prefix}/{receiver}
- GET|POST {prefix}/{receiver}/{receiver_id}

Fluxo:
1. Router resolve receiver/id e marca se o receiver existe (registrado
   e com secretKey configurado); inexistente → 404 sem verificação
2. Corpo lido com limite de tamanho (com ou sem Content-Length)
3. Verificador decide autenticidade (código, assinatura ou nenhum)
4. GET com short-circuit → protocolo de challenge do receiver
5. POST autenticado: Content-Type conferido com o body type do receiver
6. Aceito → eventos extraídos e devolvidos ao host

Segurança:
- Rejeições nunca viram exceção: sempre resposta HTTP bem formada
- Nenhum secret, código ou assinatura nos logs
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel
from starlette.requests import ClientDisconnect

from api.connectors.receivers import WebhookChallengeError, answer_get_request
from api.routes.webhooks.body_reader import BodyTooLargeError, read_limited_body, replay_request
from api.routes.webhooks.body_type import is_body_type_accepted
from app.bootstrap import WebhookRuntime, get_webhook_runtime
from app.constants.webhooks import ID_KEY_NAME, RECEIVER_EXISTS_KEY_NAME, RECEIVER_KEY_NAME
from app.domain.verification import RejectionReason
from app.observability import (
    get_correlation_id,
    reset_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)
from app.services.event_names import populate_event_names
from app.services.route_values import build_route_context

logger = logging.getLogger(__name__)

router = APIRouter()

REJECTION_STATUS: dict[RejectionReason, int] = {
    RejectionReason.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    RejectionReason.NOT_CONFIGURED: status.HTTP_404_NOT_FOUND,
    RejectionReason.INVALID_CODE: status.HTTP_400_BAD_REQUEST,
    RejectionReason.INVALID_SIGNATURE: status.HTTP_401_UNAUTHORIZED,
    RejectionReason.CANCELLED: status.HTTP_400_BAD_REQUEST,
}


class WebhookReceivedResponse(BaseModel):
    """Confirmação de recebimento com os eventos resolvidos."""

    status: str = "received"
    receiver: str
    id: str | None = None
    events: list[str]
    correlation_id: str


def _get_runtime(request: Request) -> WebhookRuntime:
    runtime = getattr(request.app.state, "webhook_runtime", None)
    return runtime if runtime is not None else get_webhook_runtime()


def build_route_values(
    runtime: WebhookRuntime,
    receiver: str,
    receiver_id: str | None,
) -> dict[str, object]:
    """Monta os route values do request, incluindo o marcador de existência."""
    receiver_name = receiver.lower()
    metadata = runtime.registry.find_metadata(receiver_name)
    receiver_exists = metadata is not None and runtime.secret_keys.has_secret_keys(metadata.name)
    values: dict[str, object] = {
        RECEIVER_KEY_NAME: receiver_name,
        RECEIVER_EXISTS_KEY_NAME: receiver_exists,
    }
    if receiver_id:
        values[ID_KEY_NAME] = receiver_id
    return values


def _plain(content: str, status_code: int) -> Response:
    return Response(content=content, media_type="text/plain", status_code=status_code)


def _content_length(request: Request) -> int | None:
    raw = request.headers.get("content-length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _payload_too_large(receiver_name: str, max_body_bytes: int) -> Response:
    logger.warning(
        "webhook_body_too_large",
        extra={
            "receiver": receiver_name,
            "max_body_bytes": max_body_bytes,
            "correlation_id": get_correlation_id(),
        },
    )
    return _plain("Payload Too Large", status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)


async def _handle(
    request: Request,
    receiver: str,
    receiver_id: str | None,
) -> Response | dict[str, Any]:
    runtime = _get_runtime(request)
    route_values = build_route_values(runtime, receiver, receiver_id)
    context = build_route_context(route_values)

    if not context.receiver_exists:
        logger.info(
            "webhook_receiver_not_found",
            extra={"receiver": context.receiver_name, "correlation_id": get_correlation_id()},
        )
        return _plain("Not Found", status.HTTP_404_NOT_FOUND)

    metadata = runtime.registry.get_metadata(context.receiver_name or "")
    max_body_bytes = runtime.settings.max_body_bytes

    content_length = _content_length(request)
    if content_length is not None and content_length > max_body_bytes:
        return _payload_too_large(metadata.name, max_body_bytes)
    try:
        body = await read_limited_body(request, max_body_bytes)
    except BodyTooLargeError:
        return _payload_too_large(metadata.name, max_body_bytes)
    except ClientDisconnect:
        return _plain(RejectionReason.CANCELLED.value, status.HTTP_400_BAD_REQUEST)
    request = replay_request(request, body)

    result = await runtime.verifier.verify(request, context)

    if result.short_circuited:
        return _answer_get(runtime, request, metadata.name, context.configuration_id)

    if not result.accepted:
        reason = result.reason or RejectionReason.INVALID_SIGNATURE
        return _plain(reason.value, REJECTION_STATUS[reason])

    # Content-Type só é avaliado depois de autenticado
    if request.method == "POST" and not is_body_type_accepted(
        metadata.body_type, request.headers.get("content-type")
    ):
        logger.warning(
            "webhook_body_type_invalid",
            extra={
                "receiver": metadata.name,
                "expected": metadata.body_type.value,
                "correlation_id": get_correlation_id(),
            },
        )
        return _plain("Unsupported Media Type", status.HTTP_415_UNSUPPORTED_MEDIA_TYPE)

    populate_event_names(metadata, request.headers, body, route_values)
    context = build_route_context(route_values)

    logger.info(
        "webhook_received",
        extra={
            "receiver": context.receiver_name,
            "configuration_id": context.configuration_id,
            "event_count": len(context.event_names),
            "payload_size": len(body),
            "correlation_id": get_correlation_id(),
        },
    )

    return WebhookReceivedResponse(
        receiver=metadata.name,
        id=context.configuration_id,
        events=list(context.event_names),
        correlation_id=get_correlation_id(),
    ).model_dump()


def _answer_get(
    runtime: WebhookRuntime,
    request: Request,
    receiver_name: str,
    configuration_id: str | None,
) -> Response:
    metadata = runtime.registry.get_metadata(receiver_name)
    protocol = metadata.get_request_protocol
    if protocol is None:
        return _plain("Method Not Allowed", status.HTTP_405_METHOD_NOT_ALLOWED)

    secret_keys = runtime.secret_keys.get_secret_keys(receiver_name, configuration_id)
    try:
        challenge = answer_get_request(protocol, request.query_params, secret_keys)
    except WebhookChallengeError as exc:
        logger.warning(
            "webhook_challenge_failed",
            extra={
                "receiver": receiver_name,
                "error": str(exc),
                "correlation_id": get_correlation_id(),
            },
        )
        return _plain("Forbidden", status.HTTP_403_FORBIDDEN)

    logger.info(
        "webhook_challenge_answered",
        extra={"receiver": receiver_name, "correlation_id": get_correlation_id()},
    )
    # Senders esperam o challenge como texto puro
    return _plain(challenge, status.HTTP_200_OK)


@router.api_route("/{receiver}", methods=["GET", "POST"], response_model=None)
async def receive_default_webhook(request: Request, receiver: str) -> Response | dict[str, Any]:
    """Recebe webhook para o id de configuração padrão."""
    token = set_correlation_id(resolve_correlation_id(request.headers))
    try:
        return await _handle(request, receiver, None)
    finally:
        reset_correlation_id(token)


@router.api_route("/{receiver}/{receiver_id}", methods=["GET", "POST"], response_model=None)
async def receive_webhook(
    request: Request,
    receiver: str,
    receiver_id: str,
) -> Response | dict[str, Any]:
    """Recebe webhook para um id de configuração específico."""
    token = set_correlation_id(resolve_correlation_id(request.headers))
    try:
        return await _handle(request, receiver, receiver_id)
    finally:
        reset_correlation_id(token)
