"""Testes para WebhookSecurityVerifier."""

from __future__ import annotations

import hashlib
import hmac
import json

import pytest

from api.connectors.receivers import create_code_metadata
from app.bootstrap.receivers_factory import create_webhook_runtime
from app.domain.receivers import ReceiverMetadata, RouteContext
from app.domain.verification import RejectionReason
from app.infra.configuration import MappingConfigurationSource
from app.infra.crypto import signature as signature_module
from app.services.security_verifier import WebhookSecurityVerifier
from config.settings import WebhookSettings

NOW = 1_700_000_000
GITHUB_BODY = b'{"action":"opened"}'


def _github_signature(secret: str, body: bytes = GITHUB_BODY) -> str:
    digest = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return f"sha256={digest}"


def _stripe_signature(secret: str, body: bytes, timestamp: int = NOW) -> str:
    payload = f"{timestamp}.".encode() + body
    digest = hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def _verifier(receivers: dict, extra: tuple[ReceiverMetadata, ...] = ()) -> WebhookSecurityVerifier:
    runtime = create_webhook_runtime(
        WebhookSettings(),
        MappingConfigurationSource({"receivers": receivers}),
        extra_receivers=extra,
    )
    return WebhookSecurityVerifier(runtime.registry, runtime.secret_keys, clock=lambda: NOW)


def _context(receiver: str | None, configuration_id: str | None = None) -> RouteContext:
    return RouteContext(receiver_name=receiver, configuration_id=configuration_id, receiver_exists=True)


class TestBodySignature:
    """Testes para receivers com assinatura do corpo."""

    @pytest.mark.asyncio
    async def test_accepts_signature_from_configured_key(self, build_request) -> None:
        verifier = _verifier({"github": {"secretKey": {"default": "k1"}}})
        request = build_request(
            body=GITHUB_BODY,
            headers={"X-Hub-Signature-256": _github_signature("k1")},
        )

        result = await verifier.verify(request, _context("github"))

        assert result.accepted is True
        assert result.reason is None

    @pytest.mark.asyncio
    async def test_rejects_signature_from_other_key(self, build_request) -> None:
        verifier = _verifier({"github": {"secretKey": {"default": "k1"}}})
        request = build_request(
            body=GITHUB_BODY,
            headers={"X-Hub-Signature-256": _github_signature("other")},
        )

        result = await verifier.verify(request, _context("github"))

        assert result.accepted is False
        assert result.reason is RejectionReason.INVALID_SIGNATURE

    @pytest.mark.asyncio
    async def test_rejects_missing_or_malformed_header(self, build_request) -> None:
        verifier = _verifier({"github": {"secretKey": {"default": "k1"}}})

        missing = await verifier.verify(build_request(body=GITHUB_BODY), _context("github"))
        malformed = await verifier.verify(
            build_request(body=GITHUB_BODY, headers={"X-Hub-Signature-256": "sha256=zz"}),
            _context("github"),
        )

        assert missing.reason is RejectionReason.INVALID_SIGNATURE
        assert malformed.reason is RejectionReason.INVALID_SIGNATURE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("secret", ["k1", "k2"])
    async def test_rotation_accepts_both_keys(self, build_request, secret: str) -> None:
        verifier = _verifier({"github": {"secretKey": {"default": ["k1", "k2"]}}})
        request = build_request(
            body=GITHUB_BODY,
            headers={"X-Hub-Signature-256": _github_signature(secret)},
        )

        result = await verifier.verify(request, _context("github"))

        assert result.accepted is True

    @pytest.mark.asyncio
    async def test_old_key_still_accepted_after_adding_new(self, build_request) -> None:
        before = _verifier({"github": {"secretKey": {"default": ["k1"]}}})
        after = _verifier({"github": {"secretKey": {"default": ["k1", "k2"]}}})
        headers = {"X-Hub-Signature-256": _github_signature("k1")}

        first = await before.verify(build_request(body=GITHUB_BODY, headers=headers), _context("github"))
        second = await after.verify(build_request(body=GITHUB_BODY, headers=headers), _context("github"))

        assert first.accepted is True
        assert second.accepted is True

    @pytest.mark.asyncio
    async def test_configuration_id_selects_keys(self, build_request) -> None:
        verifier = _verifier({"github": {"secretKey": {"default": "k1", "org1": "k2"}}})
        headers = {"X-Hub-Signature-256": _github_signature("k2")}

        default = await verifier.verify(build_request(body=GITHUB_BODY, headers=headers), _context("github"))
        org1 = await verifier.verify(
            build_request(body=GITHUB_BODY, headers=headers),
            _context("github", "org1"),
        )

        assert default.accepted is False
        assert org1.accepted is True

    @pytest.mark.asyncio
    async def test_compares_every_key(self, build_request, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[bytes, bytes]] = []
        real_compare = hmac.compare_digest

        def _spy(left: bytes, right: bytes) -> bool:
            calls.append((left, right))
            return real_compare(left, right)

        monkeypatch.setattr(signature_module.hmac, "compare_digest", _spy)
        verifier = _verifier({"github": {"secretKey": {"default": ["k1", "k2", "k3"]}}})
        request = build_request(
            body=GITHUB_BODY,
            headers={"X-Hub-Signature-256": _github_signature("k1")},
        )

        result = await verifier.verify(request, _context("github"))

        assert result.accepted is True
        # Sem saída antecipada: uma comparação por chave mesmo após o match
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_client_disconnect_is_cancelled(self, build_request) -> None:
        verifier = _verifier({"github": {"secretKey": {"default": "k1"}}})
        request = build_request(
            headers={"X-Hub-Signature-256": _github_signature("k1")},
            disconnect=True,
        )

        result = await verifier.verify(request, _context("github"))

        assert result.reason is RejectionReason.CANCELLED


class TestStripe:
    """Testes para o esquema v1 do Stripe."""

    @pytest.mark.asyncio
    async def test_default_id_signature_accepted(self, build_request) -> None:
        verifier = _verifier({"stripe": {"secretKey": {"default": "abc123"}}})
        body = json.dumps({"type": "charge.succeeded"}).encode()
        request = build_request(
            body=body,
            headers={"Stripe-Signature": _stripe_signature("abc123", body)},
        )

        result = await verifier.verify(request, _context("stripe"))

        assert result.accepted is True

    @pytest.mark.asyncio
    async def test_any_v1_signature_may_match(self, build_request) -> None:
        verifier = _verifier({"stripe": {"secretKey": {"default": "abc123"}}})
        body = b'{"type":"charge.succeeded"}'
        valid = _stripe_signature("abc123", body).split(",")[1]
        request = build_request(
            body=body,
            headers={"Stripe-Signature": f"t={NOW},v1={'00' * 32},{valid}"},
        )

        result = await verifier.verify(request, _context("stripe"))

        assert result.accepted is True

    @pytest.mark.asyncio
    async def test_timestamp_outside_tolerance_rejected(self, build_request) -> None:
        verifier = _verifier({"stripe": {"secretKey": {"default": "abc123"}}})
        body = b'{"type":"charge.succeeded"}'
        request = build_request(
            body=body,
            headers={"Stripe-Signature": _stripe_signature("abc123", body, timestamp=NOW - 3600)},
        )

        result = await verifier.verify(request, _context("stripe"))

        assert result.reason is RejectionReason.INVALID_SIGNATURE

    @pytest.mark.asyncio
    async def test_direct_webhook_uses_code(self, build_request) -> None:
        verifier = _verifier(
            {"stripe": {"directWebHook": "true", "secretKey": {"default": "abc123"}}}
        )

        accepted = await verifier.verify(
            build_request(method="POST", query_string="code=abc123", body=b"{}"),
            _context("stripe"),
        )
        rejected = await verifier.verify(
            build_request(method="POST", query_string="code=nope", body=b"{}"),
            _context("stripe"),
        )

        assert accepted.accepted is True
        assert rejected.reason is RejectionReason.INVALID_CODE


class TestStaticCode:
    """Testes para receivers com código estático."""

    @pytest.mark.asyncio
    async def test_wrong_code_rejected(self, build_request) -> None:
        verifier = _verifier(
            {"example": {"secretKey": {"default": "topsecret"}}},
            extra=(create_code_metadata("example"),),
        )
        request = build_request(method="GET", path="/webhook/example", query_string="code=wrong")

        result = await verifier.verify(request, _context("example"))

        assert result.accepted is False
        assert result.reason is RejectionReason.INVALID_CODE

    @pytest.mark.asyncio
    async def test_right_code_accepted(self, build_request) -> None:
        verifier = _verifier(
            {"example": {"secretKey": {"default": "topsecret"}}},
            extra=(create_code_metadata("example"),),
        )
        request = build_request(method="GET", query_string="code=topsecret")

        result = await verifier.verify(request, _context("example"))

        assert result.accepted is True

    @pytest.mark.asyncio
    async def test_missing_code_rejected(self, build_request) -> None:
        verifier = _verifier({"kudu": {"secretKey": {"default": "topsecret"}}})

        result = await verifier.verify(build_request(method="POST"), _context("kudu"))

        assert result.reason is RejectionReason.INVALID_CODE


class TestTerminalStates:
    """Testes para rejeições sem verificação criptográfica."""

    @pytest.mark.asyncio
    async def test_unknown_receiver_not_found(self, build_request) -> None:
        verifier = _verifier({})

        result = await verifier.verify(build_request(), _context("unknown"))

        assert result.reason is RejectionReason.NOT_FOUND

    @pytest.mark.asyncio
    async def test_missing_receiver_name_not_found(self, build_request) -> None:
        verifier = _verifier({})

        result = await verifier.verify(build_request(), _context(None))

        assert result.reason is RejectionReason.NOT_FOUND

    @pytest.mark.asyncio
    async def test_missing_keys_not_configured(self, build_request) -> None:
        verifier = _verifier({"github": {"secretKey": {"default": "k1"}}})

        result = await verifier.verify(
            build_request(body=GITHUB_BODY, headers={"X-Hub-Signature-256": _github_signature("k1")}),
            _context("github", "other"),
        )

        assert result.reason is RejectionReason.NOT_CONFIGURED

    @pytest.mark.asyncio
    async def test_short_circuit_get(self, build_request) -> None:
        verifier = _verifier({"dropbox": {"secretKey": {"default": "dropbox-secret-01"}}})

        result = await verifier.verify(
            build_request(method="GET", query_string="challenge=abc"),
            _context("dropbox"),
        )

        assert result.accepted is True
        assert result.short_circuited is True

    @pytest.mark.asyncio
    async def test_receiver_without_strategy_accepted(self, build_request) -> None:
        verifier = _verifier({}, extra=(ReceiverMetadata(name="open"),))

        result = await verifier.verify(build_request(), _context("open"))

        assert result.accepted is True

    @pytest.mark.asyncio
    async def test_rejection_logged_without_secret(
        self,
        build_request,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        verifier = _verifier(
            {"example": {"secretKey": {"default": "topsecret"}}},
            extra=(create_code_metadata("example"),),
        )

        with caplog.at_level("INFO"):
            await verifier.verify(
                build_request(method="GET", query_string="code=wrong"),
                _context("example"),
            )

        rejected = [r for r in caplog.records if r.getMessage() == "webhook_rejected"]
        assert len(rejected) == 1
        assert rejected[0].reason == "invalid_code"
        assert "topsecret" not in caplog.text
        assert "wrong" not in caplog.text
