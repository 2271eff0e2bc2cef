"""
Shared FastAPI dependencies: database sessions, settings, auth and paging.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from fastapi import Depends, HTTPException, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from api.state import AppState
from bet_tracker.auth.security import decode_session_token
from bet_tracker.config.settings import Settings
from bet_tracker.database.models import User
from bet_tracker.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_state(request: Request) -> AppState:
    return request.app.state.app_state


def get_settings(request: Request) -> Settings:
    return get_app_state(request).settings


def get_db(request: Request) -> Iterator[Session]:
    """
    One session per request.

    Anything the handler left uncommitted is rolled back when it raises.
    """
    session = get_app_state(request).new_session()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Optional[User]:
    """
    Resolve the bearer token to a user.

    Returns None when no token is sent. A token that fails validation, or
    whose user no longer exists, is rejected with 401.
    """
    if credentials is None:
        return None

    user_id = decode_session_token(credentials.credentials, settings)
    user = db.get(User, user_id)
    if user is None:
        logger.info(f"Session for missing user {user_id} rejected")
        raise AuthenticationError("Unauthorized")
    return user


def require_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def require_demo_mode(settings: Settings) -> None:
    """Signed-out readers get demo data only while demo mode is on."""
    if not settings.demo_mode:
        raise HTTPException(status_code=401, detail="Unauthorized")


@dataclass
class PageParams:
    page: int
    limit: int


def _page_params(settings: Settings, page: int, limit: Optional[int], default: int) -> PageParams:
    if limit is None:
        limit = default
    return PageParams(page=page, limit=min(limit, settings.pagination.max_limit))


def list_page(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    settings: Settings = Depends(get_settings),
) -> PageParams:
    return _page_params(settings, page, limit, settings.pagination.default_limit)


def bankroll_page(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    settings: Settings = Depends(get_settings),
) -> PageParams:
    return _page_params(settings, page, limit, settings.pagination.bankroll_default_limit)
