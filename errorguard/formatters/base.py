"""Response formatter contract."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from typing import Protocol
from typing import runtime_checkable

from errorguard.core.errors import ApiError
from errorguard.core.errors import ValidationError


@runtime_checkable
class ResponseFormatter(Protocol):
    """Turns an :class:`ApiError` into a serializable response payload.

    Implementations must not mutate the error and must not raise.
    """

    def format(self, error: ApiError) -> Any:
        ...


def field_errors_payload(error: ValidationError) -> dict[str, list[str]]:
    """Copy field errors so the payload never aliases the error's state."""
    return {field: list(messages) for field, messages in error.field_errors.items()}


class FunctionFormatter:
    """Adapt a plain ``(ApiError) -> payload`` callable to the formatter contract."""

    def __init__(self, func: Callable[[ApiError], Any]) -> None:
        self.func = func

    def format(self, error: ApiError) -> Any:
        return self.func(error)

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"FunctionFormatter({name})"
