"""Error payload schemas produced by the bundled formatters."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Flat error payload: code, message, status and details."""

    code: str
    message: str
    status: int
    details: Any = None


class EnvelopeError(BaseModel):
    """Error object nested inside the envelope payload."""

    code: str
    message: str
    details: Any = None
    validation_errors: dict[str, list[str]] | None = None


class EnvelopeMeta(BaseModel):
    """Request metadata attached to enveloped errors."""

    timestamp: datetime
    trace_id: str
    version: str


class EnvelopeErrorResponse(BaseModel):
    """Top-level enveloped error payload."""

    success: bool = False
    error: EnvelopeError
    meta: EnvelopeMeta
