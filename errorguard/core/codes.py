"""Stable error codes and default messages for the built-in error kinds."""

from __future__ import annotations


class ErrorCode:
    """Machine-readable codes, one per built-in error kind."""

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION = "VALIDATION"
    TOO_MANY_REQUESTS = "TOO_MANY_REQUESTS"
    INTERNAL_SERVER = "INTERNAL_SERVER"
    DATABASE = "DATABASE"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"


class ErrorMessage:
    """Default human-readable messages for the built-in error kinds."""

    BAD_REQUEST = "The request was invalid or malformed."
    UNAUTHORIZED = "Authentication is required to access this resource."
    FORBIDDEN = "You do not have permission to access this resource."
    NOT_FOUND = "The requested resource could not be found."
    CONFLICT = "The request could not be completed due to a conflict."
    VALIDATION = "Validation failed"
    TOO_MANY_REQUESTS = "Too many requests have been made. Please try again later."
    INTERNAL_SERVER = "An unexpected internal server error occurred."
    DATABASE = "A server error occurred while accessing the database."
    SERVICE_UNAVAILABLE = "The service is unavailable."
    TIMEOUT = "The request timed out while processing."
