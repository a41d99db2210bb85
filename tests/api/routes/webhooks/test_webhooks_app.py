"""Testes end-to-end da aplicação com TestClient."""

from __future__ import annotations

import hashlib
import hmac

from fastapi.testclient import TestClient

from app.app import create_app
from app.bootstrap.receivers_factory import create_webhook_runtime
from app.infra.configuration import MappingConfigurationSource
from config.settings import WebhookSettings

GITHUB_KEY = "github-secret-0001"


def _client() -> TestClient:
    runtime = create_webhook_runtime(
        WebhookSettings(),
        MappingConfigurationSource({"receivers": {"github": {"secretKey": {"default": GITHUB_KEY}}}}),
    )
    return TestClient(create_app(runtime))


def test_github_delivery_accepted() -> None:
    body = b'{"zen":"Keep it logically awesome."}'
    digest = hmac.new(GITHUB_KEY.encode(), body, hashlib.sha256).hexdigest()

    response = _client().post(
        "/api/webhooks/incoming/github",
        content=body,
        headers={
            "content-type": "application/json",
            "X-Hub-Signature-256": f"sha256={digest}",
            "X-GitHub-Event": "ping",
        },
    )

    assert response.status_code == 200
    assert response.json()["events"] == ["ping"]


def test_unknown_receiver_not_found() -> None:
    response = _client().post(
        "/api/webhooks/incoming/unknown",
        content=b"{}",
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 404


def test_unsupported_method() -> None:
    response = _client().put("/api/webhooks/incoming/github", content=b"{}")

    assert response.status_code == 405


def test_health() -> None:
    response = _client().get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
