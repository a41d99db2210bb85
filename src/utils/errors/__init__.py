"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ConfigurationRootError,
    ReceiverConfigurationError,
    WebhookConfigurationError,
)

__all__ = [
    "ConfigurationRootError",
    "ReceiverConfigurationError",
    "WebhookConfigurationError",
]
