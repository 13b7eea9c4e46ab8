"""Startup-time resolution of the configured response formatter."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Mapping
from typing import Any
from typing import Union

from errorguard.core.config import ErrorGuardSettings
from errorguard.core.config import get_settings
from errorguard.core.errors import ApiError
from errorguard.core.errors import ConfigurationError
from errorguard.formatters.base import FunctionFormatter
from errorguard.formatters.base import ResponseFormatter
from errorguard.formatters.default import DefaultErrorFormatter
from errorguard.formatters.envelope import EnvelopeErrorFormatter

FormatterSelection = Union[
    ResponseFormatter,
    type[ResponseFormatter],
    Callable[[ApiError], Any],
    str,
    None,
]

FORMATTERS: Mapping[str, Callable[[ErrorGuardSettings], ResponseFormatter]] = {
    "default": lambda _settings: DefaultErrorFormatter(),
    "envelope": lambda settings: EnvelopeErrorFormatter(version=settings.envelope_version),
}


def resolve_formatter(
    selection: FormatterSelection,
    settings: ErrorGuardSettings | None = None,
) -> ResponseFormatter:
    """Turn a formatter selection into a formatter instance.

    Accepts a formatter instance, a formatter class (built with no
    arguments), a plain ``(ApiError) -> payload`` callable, or the name of a
    bundled formatter. Named formatters are built from ``settings``.

    Raises:
        ConfigurationError: when nothing usable was selected.
    """
    if selection is None:
        raise ConfigurationError(
            "A response formatter is required; pass formatter= or set ERRORGUARD_FORMATTER."
        )

    if isinstance(selection, str):
        factory = FORMATTERS.get(selection.strip().lower())
        if factory is None:
            known = ", ".join(sorted(FORMATTERS))
            raise ConfigurationError(f"Unknown formatter {selection!r}; expected one of: {known}")
        return factory(settings or get_settings())

    if isinstance(selection, type):
        if not callable(getattr(selection, "format", None)):
            raise ConfigurationError(f"{selection.__name__} does not define format(error)")
        try:
            return selection()
        except TypeError as exc:
            raise ConfigurationError(f"{selection.__name__} cannot be built without arguments: {exc}") from exc

    if isinstance(selection, ResponseFormatter):
        return selection

    if callable(selection):
        return FunctionFormatter(selection)

    raise ConfigurationError(f"Unsupported formatter selection: {selection!r}")
