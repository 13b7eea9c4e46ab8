"""Authentication API routes."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Request
from sqlalchemy.orm import Session

from errorguard.sample.db.base import get_db_session
from errorguard.sample.rate_limit import LoginAttemptTracker
from errorguard.sample.schemas import LoginRequest
from errorguard.sample.schemas import LoginResponse
from errorguard.sample.schemas import LoginUser
from errorguard.sample.services.auth import SAMPLE_TOKEN
from errorguard.sample.services.auth import login_service

router = APIRouter(prefix="/api", tags=["auth"])


def get_login_tracker(request: Request) -> LoginAttemptTracker:
    return request.app.state.login_attempts


@router.post("/auth/login", response_model=LoginResponse)
def login_endpoint(
    payload: LoginRequest,
    session: Session = Depends(get_db_session),
    tracker: LoginAttemptTracker = Depends(get_login_tracker),
) -> LoginResponse:
    """Exchange sample credentials for a token."""
    user = login_service(session, tracker, payload)
    return LoginResponse(
        message="Login successful",
        token=SAMPLE_TOKEN,
        user=LoginUser(id=user.id, email=user.email, name=user.name),
    )
