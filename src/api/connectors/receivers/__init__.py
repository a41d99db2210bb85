"""Receivers concretos — um descriptor por sender.

Cada módulo documenta o hash, a codificação do header e a origem dos
eventos do seu sender. create_builtin_receivers() é usado pelo bootstrap
para popular o registro no startup.
"""

from __future__ import annotations

from app.domain.receivers import ReceiverMetadata
from app.protocols.configuration import ConfigurationSourceProtocol

from .challenge import WebhookChallengeError, answer_get_request
from .code_receivers import (
    create_azurealert_metadata,
    create_bitbucket_metadata,
    create_code_metadata,
    create_kudu_metadata,
)
from .dropbox import create_dropbox_metadata
from .github import create_github_metadata
from .stripe import DEFAULT_TIMESTAMP_TOLERANCE_SECONDS, create_stripe_metadata
from .whatsapp import create_whatsapp_metadata


def create_builtin_receivers(
    configuration: ConfigurationSourceProtocol,
    stripe_tolerance_seconds: int = DEFAULT_TIMESTAMP_TOLERANCE_SECONDS,
) -> list[ReceiverMetadata]:
    """Retorna os descriptors embutidos, na ordem de registro."""
    return [
        create_github_metadata(),
        create_stripe_metadata(configuration, stripe_tolerance_seconds),
        create_dropbox_metadata(),
        create_whatsapp_metadata(),
        create_bitbucket_metadata(),
        create_kudu_metadata(),
        create_azurealert_metadata(),
    ]


__all__ = [
    "WebhookChallengeError",
    "answer_get_request",
    "create_azurealert_metadata",
    "create_bitbucket_metadata",
    "create_builtin_receivers",
    "create_code_metadata",
    "create_dropbox_metadata",
    "create_github_metadata",
    "create_kudu_metadata",
    "create_stripe_metadata",
    "create_whatsapp_metadata",
]
