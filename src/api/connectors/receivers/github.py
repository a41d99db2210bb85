"""Receiver GitHub.

Assinatura: HMAC-SHA256 do corpo, hex, header `X-Hub-Signature-256`
no formato `sha256=<hex>`. Evento no header `X-GitHub-Event`.
"""

from __future__ import annotations

from app.domain.receivers import (
    BodyType,
    EventSource,
    ReceiverMetadata,
    SignatureEncoding,
    SignatureScheme,
)

RECEIVER_NAME = "github"
SIGNATURE_HEADER_NAME = "X-Hub-Signature-256"
EVENT_HEADER_NAME = "X-GitHub-Event"


def create_github_metadata() -> ReceiverMetadata:
    return ReceiverMetadata(
        name=RECEIVER_NAME,
        body_type=BodyType.JSON,
        signature=SignatureScheme(
            header_name=SIGNATURE_HEADER_NAME,
            digest="sha256",
            encoding=SignatureEncoding.HEX,
            prefix="sha256=",
        ),
        event_source=EventSource(header_name=EVENT_HEADER_NAME),
        secret_key_min_length=16,
        secret_key_max_length=128,
    )
