"""
Statistics for a user's recorded bets, backed by the database.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from bet_tracker.analysis.performance import build_stats
from bet_tracker.config.constants import BetType, Sport
from bet_tracker.database.models import Parlay, Pick, User
from bet_tracker.database.schemas import StatsResponse
from bet_tracker.tracking.bankroll_manager import BankrollManager


class StatsService:
    """Load a user's picks, parlays and ledger and aggregate them."""

    def __init__(self, session: Session, user: User):
        self.session = session
        self.user = user

    def get_stats(
        self,
        sport: Optional[Sport] = None,
        bet_type: Optional[BetType] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> StatsResponse:
        """
        Build the stats payload.

        Sport and bet type filters apply to picks only. Date filters apply
        to both picks and parlays by creation time. The balance history
        always covers the whole ledger.
        """
        pick_conditions = [Pick.user_id == self.user.id]
        parlay_conditions = [Parlay.user_id == self.user.id]
        if sport:
            pick_conditions.append(Pick.sport == sport)
        if bet_type:
            pick_conditions.append(Pick.bet_type == bet_type)
        if start_date:
            pick_conditions.append(Pick.created_at >= start_date)
            parlay_conditions.append(Parlay.created_at >= start_date)
        if end_date:
            pick_conditions.append(Pick.created_at <= end_date)
            parlay_conditions.append(Parlay.created_at <= end_date)

        picks = self.session.scalars(
            select(Pick).where(*pick_conditions).order_by(Pick.created_at.desc())
        ).all()
        parlays = self.session.scalars(select(Parlay).where(*parlay_conditions)).all()

        bankroll = BankrollManager(self.session, self.user)

        return build_stats(
            list(picks),
            list(parlays),
            bankroll.history(),
            bankroll.starting_bankroll,
        )
