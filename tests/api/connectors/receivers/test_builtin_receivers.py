"""Testes para os descriptors embutidos de receivers."""

from __future__ import annotations

import pytest

from api.connectors.receivers import (
    create_builtin_receivers,
    create_dropbox_metadata,
    create_github_metadata,
    create_stripe_metadata,
    create_whatsapp_metadata,
)
from app.domain.receivers import SignatureFormat, VerificationStrategy
from app.infra.configuration import MappingConfigurationSource


def test_github_signature_scheme() -> None:
    metadata = create_github_metadata()

    assert metadata.signature is not None
    assert metadata.signature.header_name == "X-Hub-Signature-256"
    assert metadata.signature.prefix == "sha256="
    assert metadata.event_source is not None
    assert metadata.event_source.header_name == "X-GitHub-Event"


def test_stripe_signature_scheme() -> None:
    metadata = create_stripe_metadata(MappingConfigurationSource({}), timestamp_tolerance_seconds=60)

    assert metadata.strategy is VerificationStrategy.BODY_SIGNATURE
    assert metadata.signature is not None
    assert metadata.signature.header_format is SignatureFormat.TIMESTAMPED
    assert metadata.signature.timestamp_tolerance_seconds == 60


def test_stripe_direct_webhook() -> None:
    configuration = MappingConfigurationSource({"receivers": {"stripe": {"directWebHook": "true"}}})

    metadata = create_stripe_metadata(configuration)

    assert metadata.strategy is VerificationStrategy.STATIC_CODE
    assert metadata.signature is None


def test_stripe_requires_configuration() -> None:
    with pytest.raises(ValueError):
        create_stripe_metadata(None)  # type: ignore[arg-type]


def test_short_circuit_receivers_have_protocol() -> None:
    dropbox = create_dropbox_metadata()
    whatsapp = create_whatsapp_metadata()

    assert dropbox.short_circuit_get_requests is True
    assert dropbox.get_request_protocol is not None
    assert dropbox.get_request_protocol.requires_verify_token is False
    assert whatsapp.get_request_protocol is not None
    assert whatsapp.get_request_protocol.requires_verify_token is True


def test_builtin_names_are_unique() -> None:
    names = [m.name for m in create_builtin_receivers(MappingConfigurationSource({}))]

    assert len(names) == len(set(names))
