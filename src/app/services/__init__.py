"""Serviços de aplicação.

Unidades reutilizáveis de resolução e verificação (sem IO direto além
da leitura do corpo do request). Implementações de IO ficam em app/infra/.
"""

from app.services.metadata_registry import ReceiverMetadataRegistry
from app.services.secret_keys import SecretKeyLookup
from app.services.security_verifier import WebhookSecurityVerifier

__all__ = [
    "ReceiverMetadataRegistry",
    "SecretKeyLookup",
    "WebhookSecurityVerifier",
]
