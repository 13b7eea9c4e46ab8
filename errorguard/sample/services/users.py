"""Service helpers for sample user operations."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errorguard.core.errors import ConflictError
from errorguard.core.errors import NotFoundError
from errorguard.core.errors import ValidationError
from errorguard.sample.db.base import database_operation
from errorguard.sample.db.models import User
from errorguard.sample.db.repository import create_user
from errorguard.sample.db.repository import delete_user
from errorguard.sample.db.repository import get_user
from errorguard.sample.db.repository import get_user_by_email
from errorguard.sample.db.repository import list_users
from errorguard.sample.db.repository import mark_email_verified
from errorguard.sample.schemas import CreateUserRequest

MIN_PASSWORD_LENGTH = 8


def validate_new_user(payload: CreateUserRequest) -> ValidationError:
    """Collect every field problem of a registration payload."""
    validation = ValidationError()

    if not payload.email.strip():
        validation.add_field_error("Email", "Email is required")
    elif "@" not in payload.email:
        validation.add_field_error("Email", "Email must be a valid email address")

    if not payload.password.strip():
        validation.add_field_error("Password", "Password is required")
    elif len(payload.password) < MIN_PASSWORD_LENGTH:
        validation.add_field_error("Password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if not payload.name.strip():
        validation.add_field_error("Name", "Name is required")

    return validation


def create_user_service(session: Session, payload: CreateUserRequest) -> User:
    """Validate, check uniqueness, and persist a new user."""
    validation = validate_new_user(payload)
    if validation.has_errors():
        raise validation

    message = f"A user with email '{payload.email}' already exists"
    with database_operation(session, "create user"):
        if get_user_by_email(session, payload.email) is not None:
            raise ConflictError(message)
        try:
            user = create_user(session, email=payload.email.strip(), name=payload.name.strip())
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise ConflictError(message) from exc
    return user


def list_users_service(session: Session) -> list[User]:
    with database_operation(session, "list users"):
        return list_users(session)


def get_user_service(session: Session, user_id: int) -> User:
    """Fetch a user or raise not found."""
    with database_operation(session, "load user"):
        user = get_user(session, user_id)
    if user is None:
        raise NotFoundError(f"User with ID {user_id} not found")
    return user


def delete_user_service(session: Session, user_id: int) -> None:
    user = get_user_service(session, user_id)
    with database_operation(session, "delete user"):
        delete_user(session, user)
        session.commit()


def verify_user_email_service(session: Session, user_id: int) -> User:
    """Mark a user's email as verified so the user can log in."""
    user = get_user_service(session, user_id)
    with database_operation(session, "verify user"):
        user = mark_email_verified(session, user)
        session.commit()
    return user
