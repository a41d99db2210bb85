"""Receiver WhatsApp (Meta Graph API).

GET: handshake da Meta (`hub.mode=subscribe`, `hub.verify_token`,
`hub.challenge`); o verify token é comparado com os secrets configurados.
POST: HMAC-SHA256 hex em `X-Hub-Signature-256` (`sha256=<hex>`).
Eventos: campos `entry[].changes[].field` (ex: "messages").
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

RECEIVER_NAME = "whatsapp"
SIGNATURE_HEADER_NAME = "X-Hub-Signature-256"


def create_whatsapp_metadata() -> ReceiverMetadata:
    return ReceiverMetadata(
        name=RECEIVER_NAME,
        body_type=BodyType.JSON,
        short_circuit_get_requests=True,
        get_request_protocol=GetRequestProtocol(
            challenge_parameter="hub.challenge",
            mode_parameter="hub.mode",
            expected_mode="subscribe",
            verify_token_parameter="hub.verify_token",
        ),
        signature=SignatureScheme(
            header_name=SIGNATURE_HEADER_NAME,
            digest="sha256",
            encoding=SignatureEncoding.HEX,
            prefix="sha256=",
        ),
        event_source=EventSource(json_path=("entry", "changes", "field")),
        secret_key_min_length=8,
        secret_key_max_length=128,
    )
