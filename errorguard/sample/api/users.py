"""User API routes."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Response
from sqlalchemy.orm import Session

from errorguard.sample.db.base import get_db_session
from errorguard.sample.schemas import CreateUserRequest
from errorguard.sample.schemas import UserResponse
from errorguard.sample.services.users import create_user_service
from errorguard.sample.services.users import delete_user_service
from errorguard.sample.services.users import get_user_service
from errorguard.sample.services.users import list_users_service
from errorguard.sample.services.users import verify_user_email_service

router = APIRouter(prefix="/api", tags=["users"])


@router.get("/users", response_model=list[UserResponse])
def list_users_endpoint(session: Session = Depends(get_db_session)) -> list[UserResponse]:
    """List registered users."""
    return list_users_service(session)


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user_endpoint(user_id: int, session: Session = Depends(get_db_session)) -> UserResponse:
    """Get a single user by id."""
    return get_user_service(session, user_id)


@router.post("/users", response_model=UserResponse, status_code=201)
def create_user_endpoint(
    payload: CreateUserRequest,
    response: Response,
    session: Session = Depends(get_db_session),
) -> UserResponse:
    """Register a user."""
    user = create_user_service(session, payload)
    response.headers["Location"] = f"/api/users/{user.id}"
    return user


@router.post("/users/{user_id}/verify", response_model=UserResponse)
def verify_user_endpoint(user_id: int, session: Session = Depends(get_db_session)) -> UserResponse:
    """Mark a user's email address as verified."""
    return verify_user_email_service(session, user_id)


@router.delete("/users/{user_id}", status_code=204)
def delete_user_endpoint(user_id: int, session: Session = Depends(get_db_session)) -> Response:
    """Delete a user."""
    delete_user_service(session, user_id)
    return Response(status_code=204)
