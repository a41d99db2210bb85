"""Receivers que autenticam por código estático na query (`?code=`).

O código é um secret compartilhado configurado por id; não há assinatura
do corpo, então o mesmo contrato serve para GET e POST.
"""

from __future__ import annotations

from app.domain.receivers import BodyType, EventSource, ReceiverMetadata

CODE_SECRET_MIN_LENGTH = 32
CODE_SECRET_MAX_LENGTH = 128


def create_code_metadata(
    name: str,
    event_source: EventSource | None = None,
    body_type: BodyType = BodyType.JSON,
) -> ReceiverMetadata:
    """Descriptor genérico para receivers de código estático."""
    return ReceiverMetadata(
        name=name,
        body_type=body_type,
        verify_code_parameter=True,
        event_source=event_source,
        secret_key_min_length=CODE_SECRET_MIN_LENGTH,
        secret_key_max_length=CODE_SECRET_MAX_LENGTH,
    )


def create_bitbucket_metadata() -> ReceiverMetadata:
    return create_code_metadata("bitbucket", EventSource(header_name="X-Event-Key"))


def create_kudu_metadata() -> ReceiverMetadata:
    return create_code_metadata("kudu", EventSource(constant="deployment"))


def create_azurealert_metadata() -> ReceiverMetadata:
    return create_code_metadata("azurealert", EventSource(json_path=("status",)))
