"""Protocolos de challenge/response para GET (short-circuit).

Alguns senders validam o endpoint com um GET antes de enviar eventos:
- Dropbox: ecoa `challenge`
- Meta (WhatsApp): confere `hub.mode`/`hub.verify_token` e ecoa `hub.challenge`
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.infra.crypto.signature import matches_any_code

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.domain.receivers import GetRequestProtocol, SecretKeySet


class WebhookChallengeError(ValueError):
    """Erro de verificação do desafio do webhook."""


def answer_get_request(
    protocol: GetRequestProtocol,
    query_params: Mapping[str, str],
    secret_keys: SecretKeySet | None,
) -> str:
    """Valida o challenge e retorna o conteúdo a ser respondido.

    Args:
        protocol: Contrato GET do receiver
        query_params: Query string do request
        secret_keys: Secrets do par (receiver, id); exigidos quando o
            protocolo confere verify token

    Raises:
        WebhookChallengeError: Se token estiver ausente ou inválido,
            ou se o challenge não foi enviado

    Returns:
        Desafio (string) a devolver como text/plain.
    """
    if protocol.mode_parameter is not None:
        if query_params.get(protocol.mode_parameter) != protocol.expected_mode:
            raise WebhookChallengeError("verification_failed")

    if protocol.verify_token_parameter is not None:
        if secret_keys is None:
            raise WebhookChallengeError("missing_verify_token")
        received = query_params.get(protocol.verify_token_parameter)
        if not received or not matches_any_code(secret_keys, received):
            raise WebhookChallengeError("verification_failed")

    challenge = query_params.get(protocol.challenge_parameter)
    if not challenge:
        raise WebhookChallengeError("missing_challenge")
    return challenge
