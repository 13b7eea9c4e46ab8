"""
Logging configuration for errorguard.

Library modules only call ``logging.getLogger(__name__)``; applications call
:func:`configure_logging` once at startup. Every record is stamped with the
trace id of the request it was emitted under.
"""

from __future__ import annotations

import logging
import sys

from errorguard.middleware.context import get_trace_id

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | [%(trace_id)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class TraceIdFilter(logging.Filter):
    """Attach the current request trace id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = get_trace_id()
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure stdout logging for the application.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler.addFilter(TraceIdFilter())

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )

    # Suppress noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
