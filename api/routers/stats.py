"""Performance statistics endpoints."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.deps import get_db, get_optional_user, get_settings, require_demo_mode
from bet_tracker.config.constants import BetType, Sport
from bet_tracker.config.settings import Settings
from bet_tracker.database.models import User
from bet_tracker.database.schemas import StatsResponse, to_naive_utc
from bet_tracker.demo import get_demo_stats
from bet_tracker.tracking.statistics import StatsService

router = APIRouter()


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    sport: Optional[Sport] = None,
    bet_type: Optional[BetType] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> StatsResponse:
    """
    Get win rate, profit and ROI.

    Returns:
        - overview: totals over all matching picks
        - sport_stats / bet_type_stats: one row per sport and bet type
        - parlay_stats: the same counters over parlays
        - recent_picks: ten most recent picks
        - balance_history: running balance after each ledger entry
    """
    start_date = to_naive_utc(start_date)
    end_date = to_naive_utc(end_date)

    if user is None:
        require_demo_mode(settings)
        return get_demo_stats(sport, bet_type, start_date, end_date)

    return StatsService(db, user).get_stats(
        sport=sport, bet_type=bet_type, start_date=start_date, end_date=end_date
    )
