"""
Parlay lifecycle: combine pending picks, settle and delete.
"""
from typing import Optional

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from bet_tracker.betting.odds_converter import calculate_parlay
from bet_tracker.config.constants import SETTLED_STATUSES, PickStatus
from bet_tracker.database.models import Parlay, ParlayLeg, Pick, User, utcnow
from bet_tracker.database.schemas import ParlayCreate, ParlayUpdate
from bet_tracker.exceptions import InvalidOperationError, NotFoundError
from bet_tracker.tracking.bankroll_manager import BankrollManager


def _with_legs(stmt):
    return stmt.options(selectinload(Parlay.legs).selectinload(ParlayLeg.pick))


class ParlayService:
    """CRUD and settlement for one user's parlays."""

    def __init__(self, session: Session, user: User):
        self.session = session
        self.user = user
        self.bankroll = BankrollManager(session, user)

    def list_parlays(
        self,
        status: Optional[PickStatus] = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Parlay], int]:
        conditions = [Parlay.user_id == self.user.id]
        if status:
            conditions.append(Parlay.status == status)

        total = self.session.scalar(
            select(func.count()).select_from(Parlay).where(*conditions)
        )
        parlays = self.session.scalars(
            _with_legs(select(Parlay))
            .where(*conditions)
            .order_by(Parlay.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        ).all()

        return list(parlays), int(total or 0)

    def get_parlay(self, parlay_id: str) -> Parlay:
        """
        Get one of the user's parlays with its legs.

        Raises:
            NotFoundError: If the parlay does not exist or belongs to someone else
        """
        parlay = self.session.scalars(
            _with_legs(select(Parlay)).where(
                Parlay.id == parlay_id, Parlay.user_id == self.user.id
            )
        ).first()
        if parlay is None:
            raise NotFoundError("Parlay not found")
        return parlay

    def create_parlay(self, data: ParlayCreate) -> Parlay:
        """
        Combine pending picks into a parlay.

        The parlay, its legs and its STAKE bankroll entry are committed in a
        single transaction.

        Raises:
            InvalidOperationError: If any pick is missing, foreign or settled
        """
        picks = self.session.scalars(
            select(Pick).where(
                Pick.id.in_(data.pick_ids),
                Pick.user_id == self.user.id,
                Pick.status == PickStatus.PENDING,
            )
        ).all()

        if len(picks) != len(data.pick_ids):
            found = {pick.id for pick in picks}
            raise InvalidOperationError(
                "Some picks are invalid or already settled",
                details={"invalid_pick_ids": [pid for pid in data.pick_ids if pid not in found]},
            )

        # Keep legs in the order the client sent them
        by_id = {pick.id: pick for pick in picks}
        ordered = [by_id[pid] for pid in data.pick_ids]

        quote = calculate_parlay([pick.odds for pick in ordered], data.stake)

        parlay = Parlay(
            user_id=self.user.id,
            total_odds=quote.american_odds,
            stake=data.stake,
            potential_win=float(quote.potential_win),
            status=PickStatus.PENDING,
            legs=[ParlayLeg(pick=pick) for pick in ordered],
        )
        self.session.add(parlay)
        self.session.flush()

        self.bankroll.record_stake(parlay, notes=f"Stake for parlay with {quote.legs} legs")
        self.session.commit()

        logger.info(
            f"Parlay {parlay.id} recorded: {quote.legs} legs at {quote.american_odds:+d} "
            f"for ${data.stake:.2f}"
        )
        return self.get_parlay(parlay.id)

    def update_parlay(self, parlay_id: str, data: ParlayUpdate) -> Parlay:
        """
        Settle a parlay.

        Raises:
            NotFoundError: If the parlay does not exist
            InvalidOperationError: If a settled parlay would change status
        """
        parlay = self.get_parlay(parlay_id)
        new_status = data.status

        if new_status is None or new_status == parlay.status:
            return parlay

        if parlay.status in SETTLED_STATUSES:
            raise InvalidOperationError(
                f"Parlay is already settled as {PickStatus(parlay.status).value}"
            )

        if new_status in SETTLED_STATUSES:
            parlay.status = new_status
            parlay.settled_at = utcnow()
            self.bankroll.settle(
                parlay,
                notes=(
                    f"Settled parlay with {len(parlay.legs)} legs - "
                    f"{PickStatus(new_status).value}"
                ),
            )
            self.session.commit()

        return parlay

    def delete_parlay(self, parlay_id: str) -> None:
        """Delete a parlay, its legs and its bankroll entries."""
        parlay = self.get_parlay(parlay_id)

        removed = self.bankroll.remove_entries(parlay)
        self.session.delete(parlay)
        self.session.commit()

        logger.info(f"Parlay {parlay_id} deleted with {removed} bankroll entries")
