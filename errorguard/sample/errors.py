"""Domain-specific error kinds used by the sample API."""

from __future__ import annotations

from datetime import date
from datetime import datetime
from datetime import timedelta

from fastapi import status

from errorguard.core.errors import ApiError


class EmailNotVerifiedError(ApiError):
    """Login attempted before the email address was verified."""

    def __init__(self, email: str) -> None:
        super().__init__(
            code="EMAIL_NOT_VERIFIED",
            message="Email address has not been verified",
            status=status.HTTP_403_FORBIDDEN,
            details={
                "email": email,
                "action": "Please check your inbox for the verification link",
            },
        )


class SubscriptionExpiredError(ApiError):
    def __init__(self, expiry_date: date) -> None:
        super().__init__(
            code="SUBSCRIPTION_EXPIRED",
            message="Your subscription has expired",
            status=status.HTTP_402_PAYMENT_REQUIRED,
            details={
                "expired_on": expiry_date.isoformat(),
                "message": "Please renew your subscription to continue",
            },
        )


class RateLimitExceededError(ApiError):
    """Too many attempts inside a sliding window."""

    def __init__(self, max_requests: int, window: timedelta, retry_after: datetime) -> None:
        window_minutes = window.total_seconds() / 60
        super().__init__(
            code="RATE_LIMIT_EXCEEDED",
            message=f"Rate limit exceeded. Maximum {max_requests} requests per {window_minutes:g} minutes.",
            status=status.HTTP_429_TOO_MANY_REQUESTS,
            details={
                "max_requests": max_requests,
                "window_minutes": window_minutes,
                "retry_after": retry_after.isoformat(),
            },
        )


class InsufficientStockError(ApiError):
    def __init__(self, product_name: str, requested: int, available: int) -> None:
        super().__init__(
            code="INSUFFICIENT_STOCK",
            message="Insufficient stock available",
            status=status.HTTP_409_CONFLICT,
            details={
                "product_name": product_name,
                "requested": requested,
                "available": available,
                "message": f"Only {available} units available, but {requested} requested",
            },
        )
