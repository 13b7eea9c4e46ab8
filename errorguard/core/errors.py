"""API error taxonomy raised by request handlers and consumed by the interceptor."""

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Sequence
from http import HTTPStatus
from types import MappingProxyType
from typing import Any
from typing import ClassVar

from fastapi import status

from errorguard.core.codes import ErrorCode
from errorguard.core.codes import ErrorMessage


class ConfigurationError(RuntimeError):
    """Raised at startup when error handling cannot be wired."""


class ApiError(Exception):
    """Base exception for anticipated request-processing faults.

    ``code``, ``message``, ``status`` and ``details`` are fixed at construction.
    Custom kinds subclass this and pass their own values. ``headers`` are
    added to the error response (for example ``Allow`` on a 405).
    """

    def __init__(
        self,
        *,
        code: str,
        message: str,
        status: int,
        details: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self._code = code
        self._message = message
        self._status = status
        self._details = details
        self._headers = MappingProxyType(dict(headers or {}))

    @property
    def code(self) -> str:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @property
    def status(self) -> int:
        return self._status

    @property
    def details(self) -> Any:
        return self._details

    @property
    def headers(self) -> Mapping[str, str]:
        return self._headers

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self._code!r}, status={self._status}, message={self._message!r})"


class BuiltInApiError(ApiError):
    """Error kind whose code, status and default message come from the class."""

    error_code: ClassVar[str]
    http_status: ClassVar[int]
    default_message: ClassVar[str]

    def __init__(
        self,
        details: Any = None,
        *,
        message: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            code=self.error_code,
            message=message if message is not None else self.default_message,
            status=self.http_status,
            details=details,
            headers=headers,
        )


class BadRequestError(BuiltInApiError):
    """Malformed or invalid client request."""

    error_code = ErrorCode.BAD_REQUEST
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = ErrorMessage.BAD_REQUEST


class UnauthorizedError(BuiltInApiError):
    """Authentication is missing or invalid."""

    error_code = ErrorCode.UNAUTHORIZED
    http_status = status.HTTP_401_UNAUTHORIZED
    default_message = ErrorMessage.UNAUTHORIZED


class ForbiddenError(BuiltInApiError):
    """Caller is authenticated but not allowed."""

    error_code = ErrorCode.FORBIDDEN
    http_status = status.HTTP_403_FORBIDDEN
    default_message = ErrorMessage.FORBIDDEN


class NotFoundError(BuiltInApiError):
    """Convenience exception for missing resources."""

    error_code = ErrorCode.NOT_FOUND
    http_status = status.HTTP_404_NOT_FOUND
    default_message = ErrorMessage.NOT_FOUND


class ConflictError(BuiltInApiError):
    """Request conflicts with the current state of a resource."""

    error_code = ErrorCode.CONFLICT
    http_status = status.HTTP_409_CONFLICT
    default_message = ErrorMessage.CONFLICT


class TooManyRequestsError(BuiltInApiError):
    """Rate limit exceeded."""

    error_code = ErrorCode.TOO_MANY_REQUESTS
    http_status = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = ErrorMessage.TOO_MANY_REQUESTS


class InternalServerError(BuiltInApiError):
    """Generic server-side failure; also wraps unclassified exceptions."""

    error_code = ErrorCode.INTERNAL_SERVER
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = ErrorMessage.INTERNAL_SERVER


class DatabaseError(BuiltInApiError):
    """Failure while talking to the data store."""

    error_code = ErrorCode.DATABASE
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = ErrorMessage.DATABASE


class ServiceUnavailableError(BuiltInApiError):
    """A dependency or the service itself is unavailable."""

    error_code = ErrorCode.SERVICE_UNAVAILABLE
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = ErrorMessage.SERVICE_UNAVAILABLE


class RequestTimeoutError(BuiltInApiError):
    """Processing exceeded a deadline enforced by domain code."""

    error_code = ErrorCode.TIMEOUT
    http_status = status.HTTP_504_GATEWAY_TIMEOUT
    default_message = ErrorMessage.TIMEOUT


class ValidationError(ApiError):
    """Validation failure carrying zero or more messages per field.

    Messages are appended with :meth:`add_field_error`; field order and
    message order are preserved. The generic ``details`` slot stays ``None``;
    formatters render :attr:`field_errors` instead.
    """

    error_code: ClassVar[str] = ErrorCode.VALIDATION
    http_status: ClassVar[int] = status.HTTP_400_BAD_REQUEST
    default_message: ClassVar[str] = ErrorMessage.VALIDATION

    def __init__(
        self,
        message: str = ErrorMessage.VALIDATION,
        field_errors: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        super().__init__(code=self.error_code, message=message, status=self.http_status)
        self._field_errors: dict[str, list[str]] = {}
        for field, messages in (field_errors or {}).items():
            for message_text in messages:
                self.add_field_error(field, message_text)

    @property
    def field_errors(self) -> Mapping[str, Sequence[str]]:
        """Read-only snapshot of field name to ordered messages."""
        return MappingProxyType({field: tuple(messages) for field, messages in self._field_errors.items()})

    def add_field_error(self, field: str, message: str) -> None:
        """Append ``message`` to the messages recorded for ``field``."""
        self._field_errors.setdefault(field, []).append(message)

    def has_errors(self) -> bool:
        return any(self._field_errors.values())


BUILT_IN_ERRORS: Mapping[str, type[ApiError]] = MappingProxyType(
    {
        ErrorCode.BAD_REQUEST: BadRequestError,
        ErrorCode.UNAUTHORIZED: UnauthorizedError,
        ErrorCode.FORBIDDEN: ForbiddenError,
        ErrorCode.NOT_FOUND: NotFoundError,
        ErrorCode.CONFLICT: ConflictError,
        ErrorCode.VALIDATION: ValidationError,
        ErrorCode.TOO_MANY_REQUESTS: TooManyRequestsError,
        ErrorCode.INTERNAL_SERVER: InternalServerError,
        ErrorCode.DATABASE: DatabaseError,
        ErrorCode.SERVICE_UNAVAILABLE: ServiceUnavailableError,
        ErrorCode.TIMEOUT: RequestTimeoutError,
    }
)


def _kinds_by_status() -> dict[int, type[BuiltInApiError]]:
    kinds: dict[int, type[BuiltInApiError]] = {}
    for kind in BUILT_IN_ERRORS.values():
        if issubclass(kind, BuiltInApiError):
            kinds.setdefault(kind.http_status, kind)
    return kinds


_KINDS_BY_STATUS = _kinds_by_status()


def _status_code_name(status_code: int) -> str:
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        return f"HTTP_{status_code}"
    return phrase.upper().replace("-", "_").replace(" ", "_")


def error_for_status(
    status_code: int,
    details: Any = None,
    headers: Mapping[str, str] | None = None,
) -> ApiError:
    """Return the built-in error kind for an HTTP status, or a generic one.

    Statuses shared by several kinds resolve to the first kind in
    ``BUILT_IN_ERRORS`` (400 is BAD_REQUEST, 500 is INTERNAL_SERVER).
    """
    kind = _KINDS_BY_STATUS.get(status_code)
    if kind is not None:
        return kind(details, headers=headers)

    try:
        message = HTTPStatus(status_code).description or HTTPStatus(status_code).phrase
    except ValueError:
        message = "Request failed"
    return ApiError(
        code=_status_code_name(status_code),
        message=message,
        status=status_code,
        details=details,
        headers=headers,
    )
