"""Enveloped formatter with success flag and request metadata."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from datetime import timezone
import logging
from typing import Any

from errorguard.core.config import DEFAULT_ENVELOPE_VERSION
from errorguard.core.errors import ApiError
from errorguard.core.errors import ValidationError
from errorguard.formatters.base import field_errors_payload
from errorguard.middleware.context import get_trace_id
from errorguard.schemas.error import EnvelopeError
from errorguard.schemas.error import EnvelopeErrorResponse
from errorguard.schemas.error import EnvelopeMeta

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EnvelopeErrorFormatter:
    """Format errors as ``{success, error, meta}``.

    ``error`` carries ``validation_errors`` for validation failures and
    ``details`` otherwise; ``meta`` carries the timestamp, the request trace id
    and the API version.
    """

    def __init__(
        self,
        *,
        version: str = DEFAULT_ENVELOPE_VERSION,
        trace_id_provider: Callable[[], str] = get_trace_id,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.version = version
        self.trace_id_provider = trace_id_provider
        self.clock = clock

    def format(self, error: ApiError) -> dict[str, Any]:
        trace_id = self.trace_id_provider()
        logger.debug("Formatting error %s with trace id %s", error.code, trace_id)

        if isinstance(error, ValidationError):
            body = EnvelopeError(
                code=error.code,
                message=error.message,
                validation_errors=field_errors_payload(error),
            )
            exclude = {"details"}
        else:
            body = EnvelopeError(code=error.code, message=error.message, details=error.details)
            exclude = {"validation_errors"}

        payload = EnvelopeErrorResponse(
            error=body,
            meta=EnvelopeMeta(timestamp=self.clock(), trace_id=trace_id, version=self.version),
        )
        return payload.model_dump(exclude={"error": exclude})
