"""Unit tests for the interceptor state machine against an in-memory sink."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import pytest

from errorguard.core.errors import ApiError
from errorguard.core.errors import InternalServerError
from errorguard.core.errors import NotFoundError
from errorguard.core.errors import ValidationError
from errorguard.formatters.base import FunctionFormatter
from errorguard.formatters.default import DefaultErrorFormatter
from errorguard.middleware.interceptor import ErrorInterceptor

INTERCEPTOR_LOGGER = "errorguard.middleware.interceptor"


class _RecordingSink:
    def __init__(self, *, started: bool = False, write_error: Exception | None = None) -> None:
        self.started = started
        self.status_code: int | None = None
        self.media_type: str | None = None
        self.headers: dict[str, str] = {}
        self.writes: list[Any] = []
        self._write_error = write_error

    def set_status(self, status_code: int) -> None:
        self.status_code = status_code

    def set_content_type(self, media_type: str) -> None:
        self.media_type = media_type

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    async def write(self, payload: Any) -> None:
        if self._write_error is not None:
            raise self._write_error
        self.writes.append(payload)


def _raising(exc: BaseException):
    async def call_next() -> None:
        raise exc

    return call_next


async def _succeeding() -> None:
    return None


def _run(interceptor: ErrorInterceptor, call_next, sink: _RecordingSink) -> None:
    asyncio.run(interceptor.invoke(call_next, sink))


def test_successful_request_leaves_response_untouched() -> None:
    sink = _RecordingSink()

    _run(ErrorInterceptor(DefaultErrorFormatter()), _succeeding, sink)

    assert sink.status_code is None
    assert sink.media_type is None
    assert sink.writes == []


def test_api_error_is_written_with_its_own_status() -> None:
    sink = _RecordingSink()

    _run(ErrorInterceptor(DefaultErrorFormatter()), _raising(NotFoundError("User 7 not found")), sink)

    assert sink.status_code == 404
    assert sink.media_type == "application/json"
    assert sink.writes == [
        {
            "code": "NOT_FOUND",
            "message": "The requested resource could not be found.",
            "status": 404,
            "details": "User 7 not found",
        }
    ]


def test_unclassified_exception_is_wrapped_as_internal_server_error() -> None:
    sink = _RecordingSink()

    _run(ErrorInterceptor(DefaultErrorFormatter()), _raising(OSError("disk full")), sink)

    assert sink.status_code == 500
    assert sink.writes[0]["code"] == "INTERNAL_SERVER"
    assert "disk full" in sink.writes[0]["details"]


def test_error_headers_are_applied() -> None:
    sink = _RecordingSink()
    error = ApiError(code="METHOD_NOT_ALLOWED", message="Method not allowed", status=405, headers={"Allow": "GET"})

    _run(ErrorInterceptor(DefaultErrorFormatter()), _raising(error), sink)

    assert sink.status_code == 405
    assert sink.headers == {"Allow": "GET"}


def test_custom_media_type_is_applied() -> None:
    sink = _RecordingSink()
    interceptor = ErrorInterceptor(DefaultErrorFormatter(), media_type="application/problem+json")

    _run(interceptor, _raising(NotFoundError()), sink)

    assert sink.media_type == "application/problem+json"


def test_exactly_one_write_per_fault() -> None:
    sink = _RecordingSink()

    _run(ErrorInterceptor(DefaultErrorFormatter()), _raising(ValueError("bad")), sink)

    assert len(sink.writes) == 1


def test_classify_orders_validation_before_api_errors_before_unclassified(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger=INTERCEPTOR_LOGGER)
    interceptor = ErrorInterceptor(DefaultErrorFormatter())
    validation = ValidationError()
    validation.add_field_error("Email", "Email is required")
    not_found = NotFoundError()

    assert interceptor.classify(validation) is validation
    assert interceptor.classify(not_found) is not_found
    wrapped = interceptor.classify(KeyError("missing"))

    assert isinstance(wrapped, InternalServerError)
    levels = [record.levelno for record in caplog.records if record.name == INTERCEPTOR_LOGGER]
    assert levels == [logging.WARNING, logging.ERROR, logging.CRITICAL]


def test_log_records_carry_structured_error_fields(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger=INTERCEPTOR_LOGGER)
    interceptor = ErrorInterceptor(DefaultErrorFormatter())

    interceptor.classify(NotFoundError())
    interceptor.classify(RuntimeError("disk full"))

    api_record, critical_record = [r for r in caplog.records if r.name == INTERCEPTOR_LOGGER]
    assert api_record.error_code == "NOT_FOUND"
    assert api_record.error_message == "The requested resource could not be found."
    assert api_record.error_status == 404
    assert critical_record.error_code == "INTERNAL_SERVER"
    assert critical_record.exception_type == "RuntimeError"
    assert critical_record.exception_detail == "disk full"
    assert critical_record.exc_info is not None


def test_injected_logger_is_used(caplog) -> None:
    custom = logging.getLogger("tests.custom_interceptor_logger")
    caplog.set_level(logging.DEBUG, logger=custom.name)
    interceptor = ErrorInterceptor(DefaultErrorFormatter(), logger=custom)

    interceptor.classify(NotFoundError())

    assert [record.name for record in caplog.records] == [custom.name]


def test_same_validation_error_formats_identically_across_requests() -> None:
    error = ValidationError()
    error.add_field_error("Email", "Email is required")
    interceptor = ErrorInterceptor(DefaultErrorFormatter())
    first, second = _RecordingSink(), _RecordingSink()

    _run(interceptor, _raising(error), first)
    _run(interceptor, _raising(error), second)

    assert first.writes == second.writes
    assert first.status_code == second.status_code == 400


def test_swapping_formatter_keeps_status() -> None:
    flat_sink, custom_sink = _RecordingSink(), _RecordingSink()
    error = ApiError(code="QUOTA", message="Quota exceeded", status=429)

    _run(ErrorInterceptor(DefaultErrorFormatter()), _raising(error), flat_sink)
    _run(ErrorInterceptor(FunctionFormatter(lambda e: {"oops": e.code})), _raising(error), custom_sink)

    assert flat_sink.status_code == custom_sink.status_code == 429
    assert custom_sink.writes == [{"oops": "QUOTA"}]


def test_raising_formatter_propagates_without_writing() -> None:
    def broken(_: ApiError) -> Any:
        raise LookupError("formatter bug")

    sink = _RecordingSink()

    with pytest.raises(LookupError, match="formatter bug"):
        _run(ErrorInterceptor(FunctionFormatter(broken)), _raising(NotFoundError()), sink)

    assert sink.writes == []


def test_fault_after_response_started_is_reraised(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger=INTERCEPTOR_LOGGER)
    sink = _RecordingSink(started=True)

    with pytest.raises(RuntimeError, match="stream broke"):
        _run(ErrorInterceptor(DefaultErrorFormatter()), _raising(RuntimeError("stream broke")), sink)

    assert sink.writes == []
    assert sink.status_code is None
    assert caplog.records[-1].levelno == logging.CRITICAL


def test_cancellation_is_not_intercepted() -> None:
    sink = _RecordingSink()

    with pytest.raises(asyncio.CancelledError):
        _run(ErrorInterceptor(DefaultErrorFormatter()), _raising(asyncio.CancelledError()), sink)

    assert sink.writes == []


def test_write_aborted_by_disconnect_is_not_reported() -> None:
    sink = _RecordingSink(write_error=ConnectionResetError("client gone"))

    _run(ErrorInterceptor(DefaultErrorFormatter()), _raising(NotFoundError()), sink)

    assert sink.status_code == 404
