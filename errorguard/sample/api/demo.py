"""Routes that raise each error kind on purpose."""

from __future__ import annotations

from datetime import date
from datetime import datetime
from datetime import timedelta
from datetime import timezone

from fastapi import APIRouter

from errorguard.core.errors import BadRequestError
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
from errorguard.sample.errors import EmailNotVerifiedError
from errorguard.sample.errors import InsufficientStockError
from errorguard.sample.errors import RateLimitExceededError
from errorguard.sample.errors import SubscriptionExpiredError
from errorguard.sample.schemas import CreateUserRequest
from errorguard.sample.services.users import MIN_PASSWORD_LENGTH

router = APIRouter(prefix="/api", tags=["demo"])


@router.get("/demo/bad-request")
def bad_request() -> None:
    raise BadRequestError("This is a simulated bad request error")


@router.get("/demo/unauthorized")
def unauthorized() -> None:
    raise UnauthorizedError("You must be logged in to access this resource")


@router.get("/demo/forbidden")
def forbidden() -> None:
    raise ForbiddenError("You don't have permission to access this resource")


@router.get("/demo/not-found")
def not_found() -> None:
    raise NotFoundError("The requested resource was not found")


@router.get("/demo/conflict")
def conflict() -> None:
    raise ConflictError("A resource with this identifier already exists")


@router.get("/demo/rate-limit")
def rate_limit() -> None:
    raise TooManyRequestsError("Too many requests. Please try again in 60 seconds.")


@router.get("/demo/internal-error")
def internal_error() -> None:
    raise InternalServerError("An unexpected server error occurred")


@router.get("/demo/database-error")
def database_error() -> None:
    raise DatabaseError("Failed to connect to the database")


@router.get("/demo/service-unavailable")
def service_unavailable() -> None:
    raise ServiceUnavailableError("The payment gateway is temporarily unavailable")


@router.get("/demo/timeout")
def timeout() -> None:
    raise RequestTimeoutError("The request timed out after 30 seconds")


@router.post("/demo/validation")
def validation(payload: CreateUserRequest) -> dict[str, str]:
    """Collect field errors, several per field where needed, and raise them together."""
    errors = ValidationError()

    if not payload.email.strip():
        errors.add_field_error("Email", "Email is required")
    elif "@" not in payload.email:
        errors.add_field_error("Email", "Email must be valid")

    if not payload.password.strip():
        errors.add_field_error("Password", "Password is required")
    else:
        if len(payload.password) < MIN_PASSWORD_LENGTH:
            errors.add_field_error("Password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if not any(char.isdigit() for char in payload.password):
            errors.add_field_error("Password", "Password must contain at least one number")

    if not payload.name.strip():
        errors.add_field_error("Name", "Name is required")

    if errors.has_errors():
        raise errors
    return {"message": "Validation passed!"}


@router.get("/demo/unhandled-exception")
def unhandled_exception() -> None:
    raise RuntimeError("This is an unhandled exception that will be caught")


@router.get("/custom/email-not-verified")
def email_not_verified() -> None:
    raise EmailNotVerifiedError("user@example.com")


@router.get("/custom/subscription-expired")
def subscription_expired() -> None:
    raise SubscriptionExpiredError(date.today() - timedelta(days=30))


@router.get("/custom/rate-limit")
def custom_rate_limit() -> None:
    retry_after = datetime.now(timezone.utc) + timedelta(minutes=5)
    raise RateLimitExceededError(100, timedelta(hours=1), retry_after)


@router.get("/custom/insufficient-stock")
def insufficient_stock() -> None:
    raise InsufficientStockError("Laptop", requested=10, available=3)
