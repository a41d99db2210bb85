"""Connectors por sender — descriptors de segurança e protocolos GET.

Estrutura:
- receivers/: github, stripe, dropbox, whatsapp e receivers de código

Cada sender tem seu próprio módulo, garantindo SRP e isolamento.
"""

__all__: list[str] = []
