"""Configuração do pytest para o projeto Portal_Webhooks."""

from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from starlette.requests import Request  # noqa: E402

from app.bootstrap.receivers_factory import WebhookRuntime, create_webhook_runtime  # noqa: E402
from app.infra.configuration import MappingConfigurationSource  # noqa: E402
from config.settings import WebhookSettings  # noqa: E402


def _build_request(
    *,
    method: str = "POST",
    path: str = "/",
    query_string: str = "",
    body: bytes = b"",
    headers: dict[str, str] | None = None,
    runtime: WebhookRuntime | None = None,
    disconnect: bool = False,
) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope: dict[str, Any] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": path,
        "raw_path": path.encode("utf-8"),
        "query_string": query_string.encode("utf-8"),
        "headers": raw_headers,
        "app": SimpleNamespace(state=SimpleNamespace(webhook_runtime=runtime)),
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if disconnect:
            return {"type": "http.disconnect"}
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def _build_runtime(
    configuration: dict[str, Any] | None = None,
    settings: WebhookSettings | None = None,
) -> WebhookRuntime:
    return create_webhook_runtime(
        settings or WebhookSettings(),
        MappingConfigurationSource(configuration or {}),
    )


@pytest.fixture
def build_request():
    """Fábrica de Request Starlette a partir de um scope ASGI cru."""
    return _build_request


@pytest.fixture
def build_runtime():
    """Fábrica de WebhookRuntime sobre configuração em memória."""
    return _build_runtime
