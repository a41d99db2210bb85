"""Testes para config.logging.

Cobre: configure_logging, get_logger, CorrelationIdFilter,
SensitiveFieldFilter, create_json_formatter.
"""

from __future__ import annotations

import json
import logging

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    SensitiveFieldFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS
from config.logging.filters import REDACTED


def _record(msg: str = "msg", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_configure_logging_default_level(self) -> None:
        """Configura logging com nível padrão INFO."""
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    @pytest.mark.parametrize("level", ["debug", "WARNING", "Error"])
    def test_configure_logging_level_is_case_insensitive(self, level: str) -> None:
        """Nível é aceito em qualquer caixa."""
        configure_logging(level=level)
        assert logging.getLogger().level == logging.getLevelName(level.upper())

    def test_configure_logging_invalid_level_raises(self) -> None:
        """Nível inválido levanta ValueError."""
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="VERBOSE")

    def test_configure_logging_replaces_handlers(self) -> None:
        """Configure_logging substitui handlers existentes."""
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_configure_logging_installs_filters(self) -> None:
        """Handler recebe filtros de correlation_id e de campos sensíveis."""
        configure_logging(correlation_id_getter=lambda: "corr-id")
        filters = logging.getLogger().handlers[0].filters
        assert any(isinstance(f, CorrelationIdFilter) for f in filters)
        assert any(isinstance(f, SensitiveFieldFilter) for f in filters)

    def test_constants(self) -> None:
        """Constantes de nível e nome de serviço."""
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "portal_webhooks"


def test_get_logger_same_name_returns_same_instance() -> None:
    logger = get_logger("same.module")
    assert isinstance(logger, logging.Logger)
    assert logger is get_logger("same.module")


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_filter_adds_correlation_id_from_getter(self) -> None:
        """Filter adiciona correlation_id do getter."""
        record = _record()
        assert CorrelationIdFilter("portal_webhooks", lambda: "corr-123").filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "portal_webhooks"

    def test_filter_preserves_explicit_correlation_id(self) -> None:
        """Filter preserva correlation_id passado via extra."""
        record = _record(correlation_id="explicit-id")
        CorrelationIdFilter("svc", lambda: "from-getter").filter(record)
        assert record.correlation_id == "explicit-id"

    def test_filter_uses_empty_string_when_no_getter(self) -> None:
        """Filter usa string vazia quando não há getter."""
        record = _record()
        CorrelationIdFilter("svc").filter(record)
        assert record.correlation_id == ""


class TestSensitiveFieldFilter:
    """Testes para SensitiveFieldFilter."""

    def test_redacts_sensitive_fields(self) -> None:
        """Secrets, assinaturas e códigos nunca chegam ao handler."""
        record = _record(secret_key="s3cret", signature="sha256=abc", code="topsecret")
        assert SensitiveFieldFilter().filter(record) is True
        assert record.secret_key == REDACTED
        assert record.signature == REDACTED
        assert record.code == REDACTED

    def test_keeps_other_fields(self) -> None:
        """Campos não sensíveis são preservados."""
        record = _record("webhook_rejected", receiver="github", reason="invalid_signature")
        SensitiveFieldFilter().filter(record)
        assert record.receiver == "github"
        assert record.reason == "invalid_signature"
        assert record.getMessage() == "webhook_rejected"

    def test_custom_field_names(self) -> None:
        """Nomes customizados são comparados sem diferenciar caixa."""
        record = _record(api_token="x")
        SensitiveFieldFilter(["API_TOKEN"]).filter(record)
        assert record.api_token == REDACTED


class TestCreateJsonFormatter:
    """Testes para create_json_formatter e constantes."""

    def test_required_log_fields_content(self) -> None:
        """REQUIRED_LOG_FIELDS contém campos obrigatórios."""
        expected = {"asctime", "levelname", "name", "message", "correlation_id", "service"}
        assert expected == REQUIRED_LOG_FIELDS
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_json_formatter_formats_record(self) -> None:
        """JsonFormatter emite JSON com campos renomeados e extras."""
        formatter = create_json_formatter()
        record = _record(
            "webhook_verified",
            correlation_id="abc-123",
            service="portal_webhooks",
            receiver="github",
        )
        payload = json.loads(formatter.format(record))
        assert payload["message"] == "webhook_verified"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "test"
        assert payload["correlation_id"] == "abc-123"
        assert payload["receiver"] == "github"


def test_full_logging_flow() -> None:
    """Fluxo completo: configure, get_logger, log com extras sensíveis."""
    configure_logging(
        level="DEBUG",
        service_name="integration_test",
        correlation_id_getter=lambda: "int-test-001",
    )
    handler = logging.getLogger().handlers[0]
    records: list[logging.LogRecord] = []
    handler.emit = records.append  # type: ignore[method-assign]

    get_logger("integration.test").info(
        "webhook_received",
        extra={"receiver": "stripe", "event_count": 1, "secret_key": "abc123"},
    )

    assert len(records) == 1
    assert records[0].receiver == "stripe"
    assert records[0].secret_key == REDACTED
    assert records[0].correlation_id == "int-test-001"
    assert records[0].service == "integration_test"
