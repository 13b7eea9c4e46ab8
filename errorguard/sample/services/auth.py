"""Login flow for the sample API."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from errorguard.core.errors import BadRequestError
from errorguard.core.errors import UnauthorizedError
from errorguard.sample.db.base import database_operation
from errorguard.sample.db.models import User
from errorguard.sample.db.repository import get_user_by_email
from errorguard.sample.errors import EmailNotVerifiedError
from errorguard.sample.rate_limit import LoginAttemptTracker
from errorguard.sample.schemas import LoginRequest

logger = logging.getLogger(__name__)

# Sample credential shared by every account.
SAMPLE_PASSWORD = "Password123"
SAMPLE_TOKEN = "fake-jwt-token-12345"

INVALID_CREDENTIALS = "Invalid email or password"


def login_service(session: Session, tracker: LoginAttemptTracker, payload: LoginRequest) -> User:
    """Authenticate a user, enforcing the per-email attempt limit."""
    if not payload.email.strip() or not payload.password.strip():
        raise BadRequestError("Email and password are required")

    tracker.register_attempt(payload.email)

    with database_operation(session, "load user"):
        user = get_user_by_email(session, payload.email)
    if user is None:
        raise UnauthorizedError(INVALID_CREDENTIALS)

    if not user.is_email_verified:
        raise EmailNotVerifiedError(user.email)

    if payload.password != SAMPLE_PASSWORD:
        raise UnauthorizedError(INVALID_CREDENTIALS)

    logger.info("User %s logged in", user.id)
    return user
