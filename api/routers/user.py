"""User profile endpoints."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.deps import get_db, get_optional_user, get_settings, require_demo_mode, require_user
from bet_tracker.config.settings import Settings
from bet_tracker.database.models import User
from bet_tracker.database.schemas import UserResponse, UserUpdate
from bet_tracker.demo import get_demo_user
from bet_tracker.tracking.accounts import AccountService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/user", response_model=UserResponse)
def get_user(
    user: Optional[User] = Depends(get_optional_user),
    settings: Settings = Depends(get_settings),
) -> Any:
    if user is None:
        require_demo_mode(settings)
        return get_demo_user()
    return user


@router.put("/user", response_model=UserResponse)
def update_user(
    body: UserUpdate,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
) -> User:
    """Change the display name or starting bankroll."""
    return AccountService(db).update_user(user, body)


@router.delete("/user")
def delete_user(
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
) -> dict[str, str]:
    """Delete the account with every pick, parlay and bankroll entry."""
    AccountService(db).delete_user(user)
    logger.info("Account deleted on request")
    return {"message": "Account deleted successfully"}
