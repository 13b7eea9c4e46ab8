"""Unit tests for environment-driven settings and logging setup."""

from __future__ import annotations

import logging

import pytest

from errorguard.core.config import ErrorGuardSettings
from errorguard.core.config import get_settings
from errorguard.core.config import redact_url
from errorguard.core.logging import TraceIdFilter
from errorguard.middleware.context import trace_id_ctx


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "ERRORGUARD_FORMATTER",
        "ERRORGUARD_MEDIA_TYPE",
        "ERRORGUARD_ENVELOPE_VERSION",
        "ERRORGUARD_TRACE_HEADER",
        "ERRORGUARD_LOG_LEVEL",
        "ERRORGUARD_SAMPLE_DATABASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)

    assert get_settings() == ErrorGuardSettings()
    assert get_settings().formatter == "default"
    assert get_settings().media_type == "application/json"


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRORGUARD_FORMATTER", "envelope")
    monkeypatch.setenv("ERRORGUARD_ENVELOPE_VERSION", "v2")
    monkeypatch.setenv("ERRORGUARD_TRACE_HEADER", "X-Trace")
    monkeypatch.setenv("ERRORGUARD_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.formatter == "envelope"
    assert settings.envelope_version == "v2"
    assert settings.trace_header == "X-Trace"
    assert settings.log_level == "DEBUG"


def test_safe_for_logging_redacts_database_credentials() -> None:
    settings = ErrorGuardSettings(sample_database_url="postgresql+psycopg://user:secret@db:5432/app")

    safe = settings.safe_for_logging()

    assert "secret" not in safe["sample_database_url"]
    assert safe["sample_database_url"] == "postgresql+psycopg://<redacted>@db:5432/app"


@pytest.mark.parametrize(("url", "expected"), [("", "<empty>"), ("sqlite://", "sqlite://")])
def test_redact_url_leaves_credential_free_urls(url: str, expected: str) -> None:
    assert redact_url(url) == expected


def test_trace_id_filter_stamps_current_trace_id() -> None:
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)
    token = trace_id_ctx.set("trace-42")
    try:
        assert TraceIdFilter().filter(record) is True
    finally:
        trace_id_ctx.reset(token)

    assert record.trace_id == "trace-42"


def test_trace_id_filter_defaults_outside_requests() -> None:
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)

    TraceIdFilter().filter(record)

    assert record.trace_id == "unknown"
