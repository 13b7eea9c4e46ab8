"""Single catch point turning raised exceptions into formatted error responses."""

from __future__ import annotations

from collections.abc import Awaitable
from collections.abc import Callable
import logging
from typing import Any
from typing import Protocol

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse
from starlette.types import ASGIApp
from starlette.types import Message
from starlette.types import Receive
from starlette.types import Scope
from starlette.types import Send

from errorguard.core.config import DEFAULT_MEDIA_TYPE
from errorguard.core.errors import ApiError
from errorguard.core.errors import InternalServerError
from errorguard.core.errors import ValidationError
from errorguard.formatters.base import ResponseFormatter


class ResponseSink(Protocol):
    """Write-once response target supplied by the host for one request."""

    @property
    def started(self) -> bool:
        """True once the downstream handler began sending its own response."""
        ...

    def set_status(self, status_code: int) -> None:
        ...

    def set_content_type(self, media_type: str) -> None:
        ...

    def set_header(self, name: str, value: str) -> None:
        ...

    async def write(self, payload: Any) -> None:
        ...


class ErrorInterceptor:
    """Classify exceptions raised downstream and write one error response.

    The instance holds only immutable configuration and is shared by all
    concurrent requests.
    """

    def __init__(
        self,
        formatter: ResponseFormatter,
        *,
        media_type: str = DEFAULT_MEDIA_TYPE,
        logger: logging.Logger | None = None,
    ) -> None:
        self._formatter = formatter
        self._media_type = media_type
        self._logger = logger or logging.getLogger(__name__)

    @property
    def formatter(self) -> ResponseFormatter:
        return self._formatter

    @property
    def media_type(self) -> str:
        return self._media_type

    def classify(self, exc: Exception) -> ApiError:
        """Map ``exc`` onto the taxonomy and log it at the matching severity.

        Order: validation errors, other API errors, then anything else, which
        is wrapped in an :class:`InternalServerError` carrying its message.
        """
        if isinstance(exc, ValidationError):
            self._logger.warning(
                "Validation error: %s - %s",
                exc.code,
                exc.message,
                extra=_error_fields(exc),
            )
            return exc

        if isinstance(exc, ApiError):
            self._logger.error(
                "ApiError: %s - %s",
                exc.code,
                exc.message,
                extra=_error_fields(exc),
            )
            return exc

        error = InternalServerError(str(exc))
        self._logger.critical(
            "Unhandled exception occurred: %s",
            type(exc).__name__,
            exc_info=exc,
            extra={
                **_error_fields(error),
                "exception_type": type(exc).__name__,
                "exception_detail": str(exc),
            },
        )
        return error

    async def invoke(self, call_next: Callable[[], Awaitable[None]], sink: ResponseSink) -> None:
        """Run the downstream handler and write an error response if it raises.

        A successful handler owns the whole response; nothing is written here.
        A raising formatter propagates to the host.
        """
        try:
            await call_next()
        except Exception as exc:
            if sink.started:
                self._logger.critical(
                    "Exception raised after the response started; cannot write an error response",
                    exc_info=exc,
                    extra={"exception_type": type(exc).__name__},
                )
                raise

            error = self.classify(exc)
            payload = self._formatter.format(error)

            sink.set_status(error.status)
            sink.set_content_type(self._media_type)
            for name, value in error.headers.items():
                sink.set_header(name, value)
            try:
                await sink.write(payload)
            except OSError:
                self._logger.debug("Client went away before the error response was written")


def _error_fields(error: ApiError) -> dict[str, Any]:
    return {
        "error_code": error.code,
        "error_message": error.message,
        "error_status": error.status,
    }


class AsgiResponseSink:
    """Response sink that renders the payload as a Starlette JSON response."""

    def __init__(self, scope: Scope, receive: Receive, send: Send) -> None:
        self._scope = scope
        self._receive = receive
        self._send = send
        self._started = False
        self._written = False
        self.status_code = 500
        self.media_type = DEFAULT_MEDIA_TYPE
        self.headers: dict[str, str] = {}

    @property
    def started(self) -> bool:
        return self._started

    def mark_started(self) -> None:
        self._started = True

    def set_status(self, status_code: int) -> None:
        self.status_code = status_code

    def set_content_type(self, media_type: str) -> None:
        self.media_type = media_type

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    async def write(self, payload: Any) -> None:
        if self._written or self._started:
            raise RuntimeError("Response already written")
        self._written = True
        response = JSONResponse(
            content=jsonable_encoder(payload),
            status_code=self.status_code,
            headers=self.headers,
            media_type=self.media_type,
        )
        await response(self._scope, self._receive, self._send)


class ErrorInterceptorMiddleware:
    """ASGI middleware running every HTTP request through an :class:`ErrorInterceptor`."""

    def __init__(self, app: ASGIApp, interceptor: ErrorInterceptor) -> None:
        self.app = app
        self.interceptor = interceptor

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        sink = AsgiResponseSink(scope, receive, send)

        async def send_tracking_start(message: Message) -> None:
            if message["type"] == "http.response.start":
                sink.mark_started()
            await send(message)

        async def call_next() -> None:
            await self.app(scope, receive, send_tracking_start)

        await self.interceptor.invoke(call_next, sink)
