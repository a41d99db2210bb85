"""Exceções de domínio para falhas de configuração de receivers."""

from __future__ import annotations


class WebhookConfigurationError(RuntimeError):
    """Base para falhas de configuração (fatais no startup/primeiro uso)."""


class ReceiverConfigurationError(WebhookConfigurationError):
    """Receiver não registrado, descriptor inválido ou registro duplicado."""


class ConfigurationRootError(WebhookConfigurationError):
    """Raiz de configuração malformada (arquivo ilegível ou não-mapping)."""
