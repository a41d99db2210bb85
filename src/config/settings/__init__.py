"""Agregador de settings do Portal_Webhooks.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Receivers de webhook
from config.settings.webhooks import (
    DEFAULT_ROUTE_PREFIX,
    WebhookSettings,
    get_webhook_settings,
)

__all__ = [
    "DEFAULT_ROUTE_PREFIX",
    "BaseSettings",
    "Environment",
    "WebhookSettings",
    "get_base_settings",
    "get_webhook_settings",
]
