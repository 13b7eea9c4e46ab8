"""Per-request trace identifier carried through a context variable."""

from __future__ import annotations

from contextvars import ContextVar
import re
import uuid

from starlette.datastructures import Headers
from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp
from starlette.types import Message
from starlette.types import Receive
from starlette.types import Scope
from starlette.types import Send

from errorguard.core.config import DEFAULT_TRACE_HEADER

UNKNOWN_TRACE_ID = "unknown"
MAX_TRACE_ID_LENGTH = 128
_TRACE_ID_PATTERN = re.compile(r"[A-Za-z0-9._:\-]+")

trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default=UNKNOWN_TRACE_ID)


def get_trace_id() -> str:
    """Return the trace id of the request being handled, if any."""
    return trace_id_ctx.get()


def accept_trace_id(value: str | None) -> str:
    """Return a client-supplied trace id, or a fresh one when it is missing or unsafe to log."""
    if value and len(value) <= MAX_TRACE_ID_LENGTH and _TRACE_ID_PATTERN.fullmatch(value):
        return value
    return uuid.uuid4().hex


class RequestContextMiddleware:
    """Bind a trace id to each HTTP request and echo it on the response."""

    def __init__(self, app: ASGIApp, header_name: str = DEFAULT_TRACE_HEADER) -> None:
        self.app = app
        self.header_name = header_name

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        trace_id = accept_trace_id(Headers(scope=scope).get(self.header_name))
        token = trace_id_ctx.set(trace_id)

        async def send_with_trace_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers.setdefault(self.header_name, trace_id)
            await send(message)

        try:
            await self.app(scope, receive, send_with_trace_id)
        finally:
            trace_id_ctx.reset(token)
