"""Structured JSON error responses for FastAPI applications."""

from errorguard.core.codes import ErrorCode
from errorguard.core.codes import ErrorMessage
from errorguard.core.errors import BUILT_IN_ERRORS
from errorguard.core.errors import ApiError
from errorguard.core.errors import BadRequestError
from errorguard.core.errors import BuiltInApiError
from errorguard.core.errors import ConfigurationError
from errorguard.core.errors import ConflictError
from errorguard.core.errors import DatabaseError
from errorguard.core.errors import ForbiddenError
from errorguard.core.errors import InternalServerError
from errorguard.core.errors import NotFoundError
from errorguard.core.errors import RequestTimeoutError
from errorguard.core.errors import ServiceUnavailableError
from errorguard.core.errors import TooManyRequestsError
from errorguard.core.errors import UnauthorizedError
from errorguard.core.errors import ValidationError
from errorguard.formatters.base import FunctionFormatter
from errorguard.formatters.base import ResponseFormatter
from errorguard.formatters.default import DefaultErrorFormatter
from errorguard.formatters.envelope import EnvelopeErrorFormatter
from errorguard.middleware.interceptor import ErrorInterceptor
from errorguard.middleware.interceptor import ErrorInterceptorMiddleware
from errorguard.middleware.registration import install_error_handling

__all__ = [
    "BUILT_IN_ERRORS",
    "ApiError",
    "BadRequestError",
    "BuiltInApiError",
    "ConfigurationError",
    "ConflictError",
    "DatabaseError",
    "DefaultErrorFormatter",
    "EnvelopeErrorFormatter",
    "ErrorCode",
    "ErrorInterceptor",
    "ErrorInterceptorMiddleware",
    "ErrorMessage",
    "ForbiddenError",
    "FunctionFormatter",
    "InternalServerError",
    "NotFoundError",
    "RequestTimeoutError",
    "ResponseFormatter",
    "ServiceUnavailableError",
    "TooManyRequestsError",
    "UnauthorizedError",
    "ValidationError",
    "install_error_handling",
]
