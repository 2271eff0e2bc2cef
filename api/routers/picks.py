"""Pick tracking endpoints."""

from typing import Any, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.deps import (
    PageParams,
    get_db,
    get_optional_user,
    get_settings,
    list_page,
    require_demo_mode,
    require_user,
)
from bet_tracker.config.constants import BetType, PickStatus, Sport
from bet_tracker.config.settings import Settings
from bet_tracker.database.models import Pick, User
from bet_tracker.database.schemas import (
    PickCreate,
    PickListResponse,
    PickResponse,
    PickUpdate,
)
from bet_tracker.demo import get_demo_pick, list_demo_picks
from bet_tracker.tracking.pagination import build_pagination
from bet_tracker.tracking.pick_service import PickService

router = APIRouter()


@router.get("/picks", response_model=PickListResponse)
def list_picks(
    sport: Optional[Sport] = None,
    bet_type: Optional[BetType] = None,
    status: Optional[PickStatus] = None,
    paging: PageParams = Depends(list_page),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Any:
    """
    List picks, newest first.

    Filter by sport, bet type and status.
    """
    if user is None:
        require_demo_mode(settings)
        return list_demo_picks(sport, bet_type, status, paging.page, paging.limit)

    picks, total = PickService(db, user).list_picks(
        sport=sport,
        bet_type=bet_type,
        status=status,
        page=paging.page,
        limit=paging.limit,
    )
    return PickListResponse(
        picks=[PickResponse.model_validate(p) for p in picks],
        pagination=build_pagination(paging.page, paging.limit, total),
    )


@router.post("/picks", response_model=PickResponse, status_code=201)
def create_pick(
    body: PickCreate,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
) -> Pick:
    """Record a pick. Its stake is deducted from the bankroll."""
    return PickService(db, user).create_pick(body)


@router.get("/picks/{pick_id}", response_model=PickResponse)
def get_pick(
    pick_id: str,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Any:
    if user is None:
        require_demo_mode(settings)
        return get_demo_pick(pick_id)
    return PickService(db, user).get_pick(pick_id)


@router.put("/picks/{pick_id}", response_model=PickResponse)
def update_pick(
    pick_id: str,
    body: PickUpdate,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
) -> Pick:
    """
    Edit or settle a pick.

    Setting status to WON, LOST or PUSH settles the pick and rewrites its
    bankroll entry.
    """
    return PickService(db, user).update_pick(pick_id, body)


@router.delete("/picks/{pick_id}")
def delete_pick(
    pick_id: str,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
) -> dict[str, str]:
    PickService(db, user).delete_pick(pick_id)
    return {"message": "Pick deleted successfully"}
