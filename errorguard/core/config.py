"""Application configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_FORMATTER = "default"
DEFAULT_MEDIA_TYPE = "application/json"
DEFAULT_ENVELOPE_VERSION = "v1.0"
DEFAULT_TRACE_HEADER = "X-Request-ID"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_SAMPLE_DATABASE_URL = "sqlite://"


def redact_url(url: str) -> str:
    """Hide credentials embedded in a database URL."""
    if not url:
        return "<empty>"
    scheme, sep, rest = url.partition("://")
    if not sep or "@" not in rest:
        return url
    return f"{scheme}://<redacted>@{rest.split('@', 1)[1]}"


@dataclass(frozen=True)
class ErrorGuardSettings:
    """Runtime settings for error interception and the sample app."""

    formatter: str = DEFAULT_FORMATTER
    media_type: str = DEFAULT_MEDIA_TYPE
    envelope_version: str = DEFAULT_ENVELOPE_VERSION
    trace_header: str = DEFAULT_TRACE_HEADER
    log_level: str = DEFAULT_LOG_LEVEL
    sample_database_url: str = DEFAULT_SAMPLE_DATABASE_URL

    def safe_for_logging(self) -> dict[str, str]:
        """Return settings safe for logs."""
        return {
            "formatter": self.formatter,
            "media_type": self.media_type,
            "envelope_version": self.envelope_version,
            "trace_header": self.trace_header,
            "log_level": self.log_level,
            "sample_database_url": redact_url(self.sample_database_url),
        }


@lru_cache(maxsize=1)
def get_settings() -> ErrorGuardSettings:
    """Load settings from the environment."""
    return ErrorGuardSettings(
        formatter=os.getenv("ERRORGUARD_FORMATTER", DEFAULT_FORMATTER),
        media_type=os.getenv("ERRORGUARD_MEDIA_TYPE", DEFAULT_MEDIA_TYPE),
        envelope_version=os.getenv("ERRORGUARD_ENVELOPE_VERSION", DEFAULT_ENVELOPE_VERSION),
        trace_header=os.getenv("ERRORGUARD_TRACE_HEADER", DEFAULT_TRACE_HEADER),
        log_level=os.getenv("ERRORGUARD_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        sample_database_url=os.getenv("ERRORGUARD_SAMPLE_DATABASE_URL", DEFAULT_SAMPLE_DATABASE_URL),
    )
