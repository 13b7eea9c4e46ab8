"""Translate framework-raised faults into taxonomy errors.

FastAPI and Starlette turn request validation failures and ``HTTPException``
into responses on their own. These handlers re-raise them as :class:`ApiError`
instead, so they reach the interceptor like any other fault and share its
response shape.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from errorguard.core.errors import ApiError
from errorguard.core.errors import ValidationError
from errorguard.core.errors import error_for_status

LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})


def format_location(location: tuple[Any, ...] | list[Any] | Any) -> str:
    """Render a pydantic error location as a dotted field name."""
    if not isinstance(location, (tuple, list)):
        return str(location)

    filtered = [str(part) for part in location if part not in LOCATION_PREFIXES]
    if filtered:
        return ".".join(filtered)

    if not location:
        return "request"

    return str(location[0])


def validation_error_from_request(exc: RequestValidationError) -> ValidationError:
    """Aggregate request validation issues into one :class:`ValidationError`."""
    error = ValidationError()
    for issue in exc.errors():
        field = format_location(issue.get("loc", ()))
        error.add_field_error(field, str(issue.get("msg", "Invalid value")))
    return error


def api_error_from_http_exception(exc: StarletteHTTPException) -> ApiError:
    """Map an ``HTTPException`` onto the error kind for its status, keeping its headers."""
    detail = exc.detail if exc.detail else None
    return error_for_status(exc.status_code, detail, exc.headers)


async def request_validation_exception_handler(_: Request, exc: RequestValidationError) -> None:
    """Re-raise FastAPI validation failures as field-level validation errors."""
    raise validation_error_from_request(exc) from exc


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> None:
    """Re-raise HTTP exceptions as taxonomy errors."""
    raise api_error_from_http_exception(exc) from exc


def register_framework_translation(app: FastAPI) -> None:
    """Attach the translating handlers to a FastAPI app instance."""

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
