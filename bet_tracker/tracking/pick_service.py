"""
Pick lifecycle: record, edit, settle and delete single bets.

Keeps ``potential_win`` derived from odds and stake and keeps each pick's
bankroll entry in step with its stake and status.
"""
from typing import Optional

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bet_tracker.betting.odds_converter import calculate_potential_win, format_american_odds
from bet_tracker.config.constants import SETTLED_STATUSES, BetType, PickStatus, Sport
from bet_tracker.database.models import Pick, User, utcnow
from bet_tracker.database.schemas import PickCreate, PickUpdate
from bet_tracker.exceptions import InvalidOperationError, NotFoundError
from bet_tracker.tracking.bankroll_manager import BankrollManager


class PickService:
    """CRUD and settlement for one user's picks."""

    def __init__(self, session: Session, user: User):
        self.session = session
        self.user = user
        self.bankroll = BankrollManager(session, user)

    def list_picks(
        self,
        sport: Optional[Sport] = None,
        bet_type: Optional[BetType] = None,
        status: Optional[PickStatus] = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Pick], int]:
        """
        Get a page of picks, newest first.

        Returns:
            Tuple of (picks, total matching picks)
        """
        conditions = [Pick.user_id == self.user.id]
        if sport:
            conditions.append(Pick.sport == sport)
        if bet_type:
            conditions.append(Pick.bet_type == bet_type)
        if status:
            conditions.append(Pick.status == status)

        total = self.session.scalar(select(func.count()).select_from(Pick).where(*conditions))
        picks = self.session.scalars(
            select(Pick)
            .where(*conditions)
            .order_by(Pick.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        ).all()

        return list(picks), int(total or 0)

    def get_pick(self, pick_id: str) -> Pick:
        """
        Get one of the user's picks.

        Raises:
            NotFoundError: If the pick does not exist or belongs to someone else
        """
        pick = self.session.scalars(
            select(Pick).where(Pick.id == pick_id, Pick.user_id == self.user.id)
        ).first()
        if pick is None:
            raise NotFoundError("Pick not found")
        return pick

    def create_pick(self, data: PickCreate) -> Pick:
        """Record a pick and the STAKE entry for its stake."""
        pick = Pick(
            user_id=self.user.id,
            sport=data.sport,
            bet_type=data.bet_type,
            description=data.description,
            odds=data.odds,
            stake=data.stake,
            potential_win=float(calculate_potential_win(data.odds, data.stake)),
            status=PickStatus.PENDING,
            game_date=data.game_date,
        )
        self.session.add(pick)
        self.session.flush()

        self.bankroll.record_stake(pick, notes=f"Stake for pick: {pick.description}")
        self.session.commit()

        logger.info(
            f"Pick {pick.id} recorded: {pick.description} {format_american_odds(pick.odds)} "
            f"for ${pick.stake:.2f}"
        )
        return pick

    def update_pick(self, pick_id: str, data: PickUpdate) -> Pick:
        """
        Edit or settle a pick.

        Odds and stake changes recompute the potential win. Moving a pending
        pick to WON/LOST/PUSH stamps ``settled_at`` and rewrites its bankroll
        entry. Sending a settled pick's current status again changes nothing.

        Raises:
            NotFoundError: If the pick does not exist
            InvalidOperationError: If a settled pick would change status,
                odds or stake, or a leg of a pending parlay would change
                odds or stake
        """
        pick = self.get_pick(pick_id)
        changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

        new_status = changes.get("status")
        was_settled = pick.status in SETTLED_STATUSES
        repriced = ("odds" in changes and changes["odds"] != pick.odds) or (
            "stake" in changes and changes["stake"] != pick.stake
        )

        if was_settled:
            if new_status is not None and new_status != pick.status:
                raise InvalidOperationError(
                    f"Pick is already settled as {PickStatus(pick.status).value}"
                )
            if repriced:
                raise InvalidOperationError("Cannot change odds or stake of a settled pick")

        if repriced and any(leg.parlay.status == PickStatus.PENDING for leg in pick.parlay_legs):
            raise InvalidOperationError("Cannot change odds or stake of a pending parlay leg")

        if "description" in changes:
            pick.description = changes["description"]
        if "game_date" in changes:
            pick.game_date = changes["game_date"]

        if "odds" in changes or "stake" in changes:
            pick.odds = changes.get("odds", pick.odds)
            pick.stake = changes.get("stake", pick.stake)
            pick.potential_win = float(calculate_potential_win(pick.odds, pick.stake))
            if not was_settled:
                self.bankroll.update_stake(pick)

        if not was_settled and new_status in SETTLED_STATUSES:
            pick.status = new_status
            pick.settled_at = utcnow()
            self.bankroll.settle(
                pick,
                notes=f"Settled pick: {pick.description} - {PickStatus(new_status).value}",
            )

        self.session.commit()
        return pick

    def delete_pick(self, pick_id: str) -> None:
        """
        Delete a pick and its bankroll entries.

        Raises:
            NotFoundError: If the pick does not exist
            InvalidOperationError: If the pick is a leg of a parlay
        """
        pick = self.get_pick(pick_id)
        if pick.parlay_legs:
            raise InvalidOperationError("Pick is part of a parlay; delete the parlay first")

        removed = self.bankroll.remove_entries(pick)
        self.session.delete(pick)
        self.session.commit()

        logger.info(f"Pick {pick_id} deleted with {removed} bankroll entries")
