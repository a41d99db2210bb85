"""Receiver Stripe.

Assinatura (esquema v1): header `Stripe-Signature` com
`t=<timestamp>,v1=<hex>[,v1=<hex>]`; HMAC-SHA256 sobre `"<t>." + body`,
timestamp aceito dentro de uma janela de tolerância. Evento no campo
JSON `type`.

Com `receivers.stripe.directWebHook = true` o receiver passa a exigir o
código estático na query em vez da assinatura.
"""

from __future__ import annotations

from app.domain.receivers import (
    BodyType,
    EventSource,
    ReceiverMetadata,
    SignatureEncoding,
    SignatureFormat,
    SignatureScheme,
)
from app.protocols.configuration import ConfigurationSourceProtocol

RECEIVER_NAME = "stripe"
SIGNATURE_HEADER_NAME = "Stripe-Signature"
DIRECT_WEBHOOK_CONFIGURATION_KEY = "receivers.stripe.directWebHook"
DEFAULT_TIMESTAMP_TOLERANCE_SECONDS = 300


def create_stripe_metadata(
    configuration: ConfigurationSourceProtocol,
    timestamp_tolerance_seconds: int = DEFAULT_TIMESTAMP_TOLERANCE_SECONDS,
) -> ReceiverMetadata:
    """Cria descriptor Stripe conforme a flag directWebHook da configuração.

    Raises:
        ValueError: Se configuration for None.
    """
    if configuration is None:
        raise ValueError("configuration must not be None")

    event_source = EventSource(json_path=("type",))
    if configuration.is_true(DIRECT_WEBHOOK_CONFIGURATION_KEY):
        return ReceiverMetadata(
            name=RECEIVER_NAME,
            body_type=BodyType.JSON,
            verify_code_parameter=True,
            event_source=event_source,
            secret_key_min_length=16,
            secret_key_max_length=128,
        )

    return ReceiverMetadata(
        name=RECEIVER_NAME,
        body_type=BodyType.JSON,
        signature=SignatureScheme(
            header_name=SIGNATURE_HEADER_NAME,
            digest="sha256",
            encoding=SignatureEncoding.HEX,
            header_format=SignatureFormat.TIMESTAMPED,
            signature_version="v1",
            timestamp_tolerance_seconds=timestamp_tolerance_seconds,
        ),
        event_source=event_source,
        secret_key_min_length=16,
        secret_key_max_length=128,
    )
