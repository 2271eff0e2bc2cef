"""Credentials sign-up and session endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.deps import get_db, get_optional_user, get_settings
from bet_tracker.auth.security import create_session_token
from bet_tracker.config.settings import Settings
from bet_tracker.database.models import User
from bet_tracker.database.schemas import (
    LoginRequest,
    SessionResponse,
    SignupRequest,
    UserResponse,
)
from bet_tracker.tracking.accounts import AccountService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/auth/signup", response_model=UserResponse, status_code=201)
def signup(
    body: SignupRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Register a credentials account.

    New accounts start with the configured default bankroll.
    """
    return AccountService(db).create_user(
        body, starting_bankroll=float(settings.default_starting_bankroll)
    )


@router.post("/auth/login", response_model=SessionResponse)
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> SessionResponse:
    """Exchange email and password for a bearer session token."""
    user = AccountService(db).authenticate(body.email, body.password)
    session = create_session_token(user.id, settings)

    logger.info(f"User {user.id} signed in")

    return SessionResponse(
        access_token=session.token,
        expires_at=session.expires_at,
        user=UserResponse.model_validate(user),
    )


@router.get("/auth/session", response_model=Optional[UserResponse])
def current_session(user: Optional[User] = Depends(get_optional_user)) -> Optional[User]:
    """Current session user, or null when signed out."""
    return user
