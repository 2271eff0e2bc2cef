"""Parlay endpoints."""

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
from bet_tracker.betting.odds_converter import calculate_parlay
from bet_tracker.config.constants import PickStatus
from bet_tracker.config.settings import Settings
from bet_tracker.database.models import Parlay, User
from bet_tracker.database.schemas import (
    ParlayCreate,
    ParlayListResponse,
    ParlayQuoteRequest,
    ParlayQuoteResponse,
    ParlayResponse,
    ParlayUpdate,
)
from bet_tracker.demo import get_demo_parlay, list_demo_parlays
from bet_tracker.tracking.pagination import build_pagination
from bet_tracker.tracking.parlay_service import ParlayService

router = APIRouter()


@router.get("/parlays", response_model=ParlayListResponse)
def list_parlays(
    status: Optional[PickStatus] = None,
    paging: PageParams = Depends(list_page),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Any:
    """List parlays with their legs, newest first."""
    if user is None:
        require_demo_mode(settings)
        return list_demo_parlays(status, paging.page, paging.limit)

    parlays, total = ParlayService(db, user).list_parlays(
        status=status, page=paging.page, limit=paging.limit
    )
    return ParlayListResponse(
        parlays=[ParlayResponse.model_validate(p) for p in parlays],
        pagination=build_pagination(paging.page, paging.limit, total),
    )


@router.post("/parlays", response_model=ParlayResponse, status_code=201)
def create_parlay(
    body: ParlayCreate,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
) -> Parlay:
    """
    Combine two or more of the user's pending picks into a parlay.

    The combined price is the product of the legs' decimal odds.
    """
    return ParlayService(db, user).create_parlay(body)


@router.post("/parlays/quote", response_model=ParlayQuoteResponse)
def quote_parlay(body: ParlayQuoteRequest) -> ParlayQuoteResponse:
    """Price a parlay without recording it."""
    quote = calculate_parlay(body.odds, body.stake)
    return ParlayQuoteResponse(
        legs=quote.legs,
        decimal_odds=float(quote.decimal_odds),
        total_odds=quote.american_odds,
        stake=float(quote.stake),
        potential_win=float(quote.potential_win),
    )


@router.get("/parlays/{parlay_id}", response_model=ParlayResponse)
def get_parlay(
    parlay_id: str,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Any:
    if user is None:
        require_demo_mode(settings)
        return get_demo_parlay(parlay_id)
    return ParlayService(db, user).get_parlay(parlay_id)


@router.put("/parlays/{parlay_id}", response_model=ParlayResponse)
def update_parlay(
    parlay_id: str,
    body: ParlayUpdate,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
) -> Parlay:
    """Settle a parlay as WON, LOST or PUSH."""
    return ParlayService(db, user).update_parlay(parlay_id, body)


@router.delete("/parlays/{parlay_id}")
def delete_parlay(
    parlay_id: str,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
) -> dict[str, str]:
    ParlayService(db, user).delete_parlay(parlay_id)
    return {"message": "Parlay deleted successfully"}
