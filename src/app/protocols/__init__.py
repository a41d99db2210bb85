"""Protocolos e contratos do core da aplicação."""

from .configuration import ConfigurationSourceProtocol

__all__ = [
    "ConfigurationSourceProtocol",
]
