"""Tests for tenantcore.logging module."""

from __future__ import annotations

import json
import logging

import pytest

from tenantcore import (
    LogLevel,
    TenantCoreConfig,
    get_tenant_logger,
    redact_secrets,
    safe_log_value,
    safe_preview,
    setup_logging,
)
from tenantcore.logging import TenantFormatter, TenantLoggerAdapter


def make_record(msg: str = "Test message", **attrs: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


class TestSafePreview:
    """Tests for safe_preview function."""

    def test_none_value(self) -> None:
        """Test that None returns empty string."""
        assert safe_preview(None) == ""

    def test_string_with_whitespace(self) -> None:
        """Test that whitespace is normalized."""
        assert safe_preview("hello\n\tworld  test") == "hello world test"

    def test_string_truncation(self) -> None:
        """Test that long strings are truncated."""
        result = safe_preview("a" * 300, limit=100)
        assert len(result) == 100
        assert result.endswith("…")

    def test_sequence_value(self) -> None:
        """Tuples of feature ids are rendered as JSON."""
        result = safe_preview(("CMS_ENGINE", "BLOG_MODULE"))
        assert result == '["CMS_ENGINE", "BLOG_MODULE"]'


class TestRedactSecrets:
    """Tests for redact_secrets function."""

    def test_password_pattern(self) -> None:
        result = redact_secrets('password: "secret123"')
        assert "[REDACTED]" in result
        assert "secret123" not in result

    def test_bearer_token(self) -> None:
        result = redact_secrets("Authorization: Bearer abc123def456")
        assert "abc123def456" not in result

    def test_session_token(self) -> None:
        result = redact_secrets("cookie session-token=eyJhbGciOi.xyz; path=/")
        assert "eyJhbGciOi" not in result

    def test_no_secrets(self) -> None:
        text = "Tenant acme resolved with 3 features"
        assert redact_secrets(text) == text

    def test_custom_replacement(self) -> None:
        assert "[HIDDEN]" in redact_secrets("password: secret123", replacement="[HIDDEN]")


class TestSafeLogValue:
    """Tests for safe_log_value function."""

    def test_with_redaction(self) -> None:
        assert "[REDACTED]" in safe_log_value("api_key: sk-1234567890", redact=True)

    def test_without_redaction(self) -> None:
        assert "sk-1234567890" in safe_log_value("api_key: sk-1234567890", redact=False)

    def test_truncation(self) -> None:
        assert len(safe_log_value("a" * 500, limit=100)) <= 100


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_with_config(self) -> None:
        setup_logging(config=TenantCoreConfig(log_level=LogLevel.DEBUG), json_format=False)
        assert logging.getLogger().level == logging.DEBUG

    def test_setup_with_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        setup_logging(json_format=False)
        assert logging.getLogger().level == logging.WARNING

    def test_json_from_config(self, capsys: pytest.CaptureFixture) -> None:
        """log_json=True selects the JSON formatter."""
        setup_logging(config=TenantCoreConfig(log_json=True))
        logging.getLogger("test").info("Test message")

        data = json.loads(capsys.readouterr().err.strip())
        assert data["level"] == "INFO"
        assert data["message"] == "Test message"
        assert data["logger"] == "test"

    def test_plain_format(self, capsys: pytest.CaptureFixture) -> None:
        setup_logging(config=TenantCoreConfig(log_level=LogLevel.INFO), json_format=False)
        logging.getLogger("test").info("Test message")

        output = capsys.readouterr().err.strip()
        assert "INFO" in output
        assert "Test message" in output
        assert not output.startswith("{")

    def test_adapter_context_in_output(self, capsys: pytest.CaptureFixture) -> None:
        setup_logging(config=TenantCoreConfig(), json_format=True)
        get_tenant_logger("test", tenant_id="t-1", request_id="req-9").info("Resolved")

        data = json.loads(capsys.readouterr().err.strip())
        assert data["tenant_id"] == "t-1"
        assert data["request_id"] == "req-9"


class TestTenantLoggerAdapter:
    """Tests for get_tenant_logger / TenantLoggerAdapter."""

    def test_returns_adapter(self) -> None:
        logger = get_tenant_logger("test", tenant_id="t-1")
        assert isinstance(logger, TenantLoggerAdapter)
        assert logger.tenant_id == "t-1"

    def test_process_adds_context(self) -> None:
        adapter = get_tenant_logger("test", tenant_id="t-1", request_id="req-1", user_id="u-1")
        _, kwargs = adapter.process("msg", {"extra": {"route": "/dashboard"}})
        assert kwargs["extra"] == {
            "route": "/dashboard",
            "tenant_id": "t-1",
            "request_id": "req-1",
            "user_id": "u-1",
        }

    def test_per_call_override(self) -> None:
        adapter = get_tenant_logger("test", tenant_id="t-1")
        _, kwargs = adapter.process("msg", {"tenant_id": "t-2"})
        assert kwargs["extra"]["tenant_id"] == "t-2"
        assert "tenant_id" not in {k for k in kwargs if k != "extra"}

    def test_no_context(self) -> None:
        _, kwargs = get_tenant_logger("test").process("msg", {})
        assert kwargs["extra"] == {}


class TestTenantFormatter:
    """Tests for TenantFormatter."""

    def test_json_format(self) -> None:
        formatter = TenantFormatter(json_format=True)
        result = formatter.format(make_record(tenant_id="t-1", request_id="req-1"))

        data = json.loads(result)
        assert data["level"] == "INFO"
        assert data["tenant_id"] == "t-1"
        assert data["request_id"] == "req-1"

    def test_plain_format(self) -> None:
        formatter = TenantFormatter(json_format=False)
        result = formatter.format(make_record(tenant_id="t-1"))

        assert "INFO" in result
        assert "Test message" in result
        assert "tenant_id=t-1" in result

    def test_extras_are_previewed(self) -> None:
        formatter = TenantFormatter(json_format=True)
        data = json.loads(formatter.format(make_record(features=("CMS_ENGINE", "BLOG_MODULE"))))
        assert data["features"] == '["CMS_ENGINE", "BLOG_MODULE"]'

    def test_message_redacted(self) -> None:
        formatter = TenantFormatter(json_format=True)
        data = json.loads(formatter.format(make_record("login password=hunter2")))
        assert "hunter2" not in data["message"]

    def test_context_excluded_when_disabled(self) -> None:
        formatter = TenantFormatter(include_context=False, json_format=True)
        data = json.loads(formatter.format(make_record(tenant_id="t-1")))
        assert "tenant_id" not in data
