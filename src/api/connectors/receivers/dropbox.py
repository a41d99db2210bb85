"""Receiver Dropbox.

GET de verificação ecoa o query param `challenge` (short-circuit).
POST assinado com HMAC-SHA256 hex em `X-Dropbox-Signature`, sem prefixo.
Dropbox não envia tipo de evento; usamos o evento fixo `change`.
"""

from __future__ import annotations

from app.domain.receivers import (
    BodyType,
    EventSource,
    GetRequestProtocol,
    ReceiverMetadata,
    SignatureEncoding,
    SignatureScheme,
)

RECEIVER_NAME = "dropbox"
SIGNATURE_HEADER_NAME = "X-Dropbox-Signature"
CHALLENGE_PARAMETER = "challenge"
EVENT_NAME = "change"


def create_dropbox_metadata() -> ReceiverMetadata:
    return ReceiverMetadata(
        name=RECEIVER_NAME,
        body_type=BodyType.JSON,
        short_circuit_get_requests=True,
        get_request_protocol=GetRequestProtocol(challenge_parameter=CHALLENGE_PARAMETER),
        signature=SignatureScheme(
            header_name=SIGNATURE_HEADER_NAME,
            digest="sha256",
            encoding=SignatureEncoding.HEX,
        ),
        event_source=EventSource(constant=EVENT_NAME),
        secret_key_min_length=15,
        secret_key_max_length=128,
    )
