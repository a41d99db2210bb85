"""Formatter JSON dos logs do serviço.

Todo log sai como um objeto JSON por linha, com os campos de
REQUIRED_LOG_FIELDS renomeados por FIELD_RENAME_MAP e os `extra` do
chamador (receiver, configuration_id, reason...) no mesmo nível.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = frozenset(
    {
        "asctime",
        "levelname",
        "name",
        "message",
        "correlation_id",
        "service",
    }
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria o formatter JSON.

    Exemplo de linha:
        {"asctime": "...", "level": "WARNING", "logger": "app.services.security_verifier",
         "message": "webhook_rejected", "correlation_id": "abc-123",
         "service": "portal_webhooks", "receiver": "github", "reason": "invalid_signature"}
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in sorted(REQUIRED_LOG_FIELDS)),
        rename_fields=FIELD_RENAME_MAP,
        json_ensure_ascii=False,
    )
