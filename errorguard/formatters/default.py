"""Flat reference formatter."""

from __future__ import annotations

from typing import Any

from errorguard.core.errors import ApiError
from errorguard.core.errors import ValidationError
from errorguard.formatters.base import field_errors_payload
from errorguard.schemas.error import ErrorResponse


class DefaultErrorFormatter:
    """Format errors as ``{code, message, status, details}``.

    Validation errors render their field errors as ``details``.
    """

    def format(self, error: ApiError) -> dict[str, Any]:
        if isinstance(error, ValidationError):
            details: Any = field_errors_payload(error)
        else:
            details = error.details

        payload = ErrorResponse(
            code=error.code,
            message=error.message,
            status=error.status,
            details=details,
        )
        return payload.model_dump()
