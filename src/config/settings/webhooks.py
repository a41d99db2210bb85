"""Settings dos receivers de webhook.

Onde ficam os secrets (arquivo + variáveis de ambiente com prefixo),
prefixo de rota e limites de request.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_ROUTE_PREFIX = "/api/webhooks/incoming"
DEFAULT_ENV_PREFIX = "WEBHOOKS__"


@dataclass(frozen=True)
class WebhookSettings:
    """Configurações dos receivers.

    Attributes:
        config_file: Arquivo YAML/JSON com a árvore `receivers` (opcional)
        env_prefix: Prefixo das variáveis que sobrescrevem o arquivo
        route_prefix: Prefixo HTTP dos endpoints de receivers
        stripe_tolerance_seconds: Janela de timestamp da assinatura Stripe
        max_body_bytes: Tamanho máximo aceito do corpo (Content-Length)
    """

    config_file: str = ""
    env_prefix: str = DEFAULT_ENV_PREFIX
    route_prefix: str = DEFAULT_ROUTE_PREFIX
    stripe_tolerance_seconds: int = 300
    max_body_bytes: int = 1024 * 1024  # 1MB

    def validate(self) -> list[str]:
        """Valida configurações de webhooks.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if self.config_file and not os.path.isfile(self.config_file):
            errors.append(f"WEBHOOKS_CONFIG_FILE não encontrado: {self.config_file}")

        if not self.env_prefix:
            errors.append("WEBHOOKS_ENV_PREFIX não pode ser vazio")

        if not self.route_prefix.startswith("/"):
            errors.append("WEBHOOKS_ROUTE_PREFIX deve começar com '/'")

        if self.stripe_tolerance_seconds <= 0:
            errors.append("WEBHOOKS_STRIPE_TOLERANCE_SECONDS deve ser > 0")

        if self.max_body_bytes <= 0:
            errors.append("WEBHOOKS_MAX_BODY_BYTES deve ser > 0")

        return errors


def _load_webhook_settings_from_env() -> WebhookSettings:
    """Carrega WebhookSettings de variáveis de ambiente."""
    return WebhookSettings(
        config_file=os.getenv("WEBHOOKS_CONFIG_FILE", ""),
        env_prefix=os.getenv("WEBHOOKS_ENV_PREFIX", DEFAULT_ENV_PREFIX),
        route_prefix=os.getenv("WEBHOOKS_ROUTE_PREFIX", DEFAULT_ROUTE_PREFIX).rstrip("/")
        or DEFAULT_ROUTE_PREFIX,
        stripe_tolerance_seconds=int(os.getenv("WEBHOOKS_STRIPE_TOLERANCE_SECONDS", "300")),
        max_body_bytes=int(os.getenv("WEBHOOKS_MAX_BODY_BYTES", str(1024 * 1024))),
    )


@lru_cache(maxsize=1)
def get_webhook_settings() -> WebhookSettings:
    """Retorna instância cacheada de WebhookSettings."""
    return _load_webhook_settings_from_env()
