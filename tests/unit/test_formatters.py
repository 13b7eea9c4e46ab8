"""Unit tests for bundled response formatters and formatter selection."""

from __future__ import annotations

from datetime import datetime
from datetime import timezone

import pytest

from errorguard.core.config import ErrorGuardSettings
from errorguard.core.errors import ApiError
from errorguard.core.errors import ConfigurationError
from errorguard.core.errors import NotFoundError
from errorguard.core.errors import ValidationError
from errorguard.formatters.base import FunctionFormatter
from errorguard.formatters.base import ResponseFormatter
from errorguard.formatters.default import DefaultErrorFormatter
from errorguard.formatters.envelope import EnvelopeErrorFormatter
from errorguard.formatters.selection import resolve_formatter

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _signup_validation_error() -> ValidationError:
    error = ValidationError()
    error.add_field_error("Email", "Email is required")
    error.add_field_error("Email", "Email must be valid")
    error.add_field_error("Password", "Password is required")
    return error


def test_default_formatter_renders_flat_payload() -> None:
    payload = DefaultErrorFormatter().format(NotFoundError("User 7 not found"))

    assert payload == {
        "code": "NOT_FOUND",
        "message": "The requested resource could not be found.",
        "status": 404,
        "details": "User 7 not found",
    }


def test_default_formatter_keeps_details_key_when_empty() -> None:
    payload = DefaultErrorFormatter().format(NotFoundError())

    assert payload["details"] is None


def test_default_formatter_uses_field_errors_for_validation() -> None:
    payload = DefaultErrorFormatter().format(_signup_validation_error())

    assert payload == {
        "code": "VALIDATION",
        "message": "Validation failed",
        "status": 400,
        "details": {
            "Email": ["Email is required", "Email must be valid"],
            "Password": ["Password is required"],
        },
    }
    assert list(payload["details"]) == ["Email", "Password"]


def test_default_formatter_does_not_alias_or_mutate_the_error() -> None:
    error = _signup_validation_error()
    formatter = DefaultErrorFormatter()

    first = formatter.format(error)
    first["details"]["Email"].append("tampered")
    second = formatter.format(error)

    assert error.field_errors["Email"] == ("Email is required", "Email must be valid")
    assert second["details"]["Email"] == ["Email is required", "Email must be valid"]


def test_default_formatter_passes_custom_details_through() -> None:
    error = ApiError(code="EMAIL_NOT_VERIFIED", message="Verify first", status=403, details={"email": "a@b.c"})

    payload = DefaultErrorFormatter().format(error)

    assert payload["details"] == {"email": "a@b.c"}
    assert payload["status"] == 403


def test_envelope_formatter_wraps_error_with_meta() -> None:
    formatter = EnvelopeErrorFormatter(version="v2", trace_id_provider=lambda: "trace-1", clock=lambda: FIXED_NOW)

    payload = formatter.format(NotFoundError("User 7 not found"))

    assert payload == {
        "success": False,
        "error": {
            "code": "NOT_FOUND",
            "message": "The requested resource could not be found.",
            "details": "User 7 not found",
        },
        "meta": {"timestamp": FIXED_NOW, "trace_id": "trace-1", "version": "v2"},
    }


def test_envelope_formatter_renders_validation_errors_instead_of_details() -> None:
    formatter = EnvelopeErrorFormatter(trace_id_provider=lambda: "trace-2", clock=lambda: FIXED_NOW)

    payload = formatter.format(_signup_validation_error())

    assert payload["error"] == {
        "code": "VALIDATION",
        "message": "Validation failed",
        "validation_errors": {
            "Email": ["Email is required", "Email must be valid"],
            "Password": ["Password is required"],
        },
    }
    assert payload["meta"]["version"] == "v1.0"


def test_envelope_formatter_defaults_to_unknown_trace_outside_requests() -> None:
    payload = EnvelopeErrorFormatter(clock=lambda: FIXED_NOW).format(NotFoundError())

    assert payload["meta"]["trace_id"] == "unknown"


def test_function_formatter_delegates_to_callable() -> None:
    formatter = FunctionFormatter(lambda error: {"error": error.code})

    assert formatter.format(NotFoundError()) == {"error": "NOT_FOUND"}
    assert isinstance(formatter, ResponseFormatter)


def test_resolve_formatter_accepts_names_classes_instances_and_callables() -> None:
    settings = ErrorGuardSettings(envelope_version="v9")
    instance = DefaultErrorFormatter()

    assert isinstance(resolve_formatter("default", settings), DefaultErrorFormatter)
    envelope = resolve_formatter(" Envelope ", settings)
    assert isinstance(envelope, EnvelopeErrorFormatter)
    assert envelope.version == "v9"
    assert isinstance(resolve_formatter(DefaultErrorFormatter, settings), DefaultErrorFormatter)
    assert resolve_formatter(instance, settings) is instance

    def to_payload(error: ApiError) -> dict[str, str]:
        return {"code": error.code}

    wrapped = resolve_formatter(to_payload, settings)
    assert isinstance(wrapped, FunctionFormatter)
    assert wrapped.format(NotFoundError()) == {"code": "NOT_FOUND"}


@pytest.mark.parametrize("selection", [None, "", "xml", 42])
def test_resolve_formatter_rejects_missing_or_unknown_selection(selection) -> None:
    with pytest.raises(ConfigurationError):
        resolve_formatter(selection, ErrorGuardSettings())


def test_resolve_formatter_rejects_classes_without_format() -> None:
    class NotAFormatter:
        pass

    with pytest.raises(ConfigurationError):
        resolve_formatter(NotAFormatter, ErrorGuardSettings())


def test_resolve_formatter_reports_classes_needing_arguments_as_configuration_errors() -> None:
    class PrefixedFormatter:
        def __init__(self, prefix: str) -> None:
            self.prefix = prefix

        def format(self, error):
            return {"code": f"{self.prefix}{error.code}"}

    with pytest.raises(ConfigurationError, match="PrefixedFormatter"):
        resolve_formatter(PrefixedFormatter, ErrorGuardSettings())
