"""Wire error interception into a FastAPI application."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from errorguard.core.config import ErrorGuardSettings
from errorguard.core.config import get_settings
from errorguard.formatters.selection import FormatterSelection
from errorguard.formatters.selection import resolve_formatter
from errorguard.middleware.context import RequestContextMiddleware
from errorguard.middleware.framework import register_framework_translation
from errorguard.middleware.interceptor import ErrorInterceptor
from errorguard.middleware.interceptor import ErrorInterceptorMiddleware

logger = logging.getLogger(__name__)


def install_error_handling(
    app: FastAPI,
    *,
    formatter: FormatterSelection = None,
    settings: ErrorGuardSettings | None = None,
    translate_framework_errors: bool = True,
) -> ErrorInterceptor:
    """Install the error interceptor and request context on ``app``.

    ``formatter`` falls back to ``settings.formatter``. Resolution happens
    here, before the first request, so a missing or unknown formatter fails
    startup with :class:`~errorguard.core.errors.ConfigurationError`.
    """
    settings = settings or get_settings()
    selection = formatter if formatter is not None else settings.formatter
    resolved = resolve_formatter(selection, settings)

    interceptor = ErrorInterceptor(resolved, media_type=settings.media_type)

    if translate_framework_errors:
        register_framework_translation(app)

    # add_middleware prepends, so the request context wraps the interceptor.
    app.add_middleware(ErrorInterceptorMiddleware, interceptor=interceptor)
    app.add_middleware(RequestContextMiddleware, header_name=settings.trace_header)

    logger.info("Installed error handling with formatter=%r", resolved)
    return interceptor
