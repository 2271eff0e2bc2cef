"""
Bankroll management and bet ledger.

Provides balance tracking, pending exposure, manual deposits and
withdrawals, and the stake/settlement entries tied to picks and parlays.

Every pick or parlay owns exactly one bankroll entry. It is written as a
STAKE of ``-stake`` when the bet is placed and rewritten in place when the
bet settles.
"""
from typing import Optional, Union

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from bet_tracker.betting.odds_converter import round_half_up
from bet_tracker.config.constants import (
    SETTLEMENT_TRANSACTION_TYPES,
    BankrollTransactionType,
    PickStatus,
)
from bet_tracker.database.models import (
    BankrollHistory,
    Parlay,
    ParlayLeg,
    Pick,
    User,
    utcnow,
)
from bet_tracker.exceptions import InvalidOperationError

Bet = Union[Pick, Parlay]


def settlement_amount(status: PickStatus, stake: float, potential_win: float) -> float:
    """
    Signed bankroll change for a bet in a given status.

    A pending bet holds its stake; a win pays the potential win; a loss
    forfeits the stake; a push returns it.

    Examples:
        >>> settlement_amount(PickStatus.WON, 100, 90.91)
        90.91
        >>> settlement_amount(PickStatus.PENDING, 100, 90.91)
        -100.0
    """
    if status == PickStatus.WON:
        return float(potential_win)
    if status == PickStatus.PUSH:
        return 0.0
    return -float(stake)


def settlement_type(status: PickStatus) -> BankrollTransactionType:
    return SETTLEMENT_TRANSACTION_TYPES.get(status, BankrollTransactionType.STAKE)


class BankrollManager:
    """
    Manages one user's bankroll history.

    Methods that record a manual transaction commit their own unit of work.
    Stake and settlement helpers only stage rows on the session; the pick or
    parlay service calling them commits, so the bet and its ledger entry land
    in one transaction.

    Example:
        >>> manager = BankrollManager(session, user)
        >>> manager.record_transaction(250.0, BankrollTransactionType.DEPOSIT)
        >>> print(f"Balance: ${manager.current_balance:.2f}")
    """

    def __init__(self, session: Session, user: User):
        self.session = session
        self.user = user

    @property
    def starting_bankroll(self) -> float:
        return float(self.user.starting_bankroll or 0.0)

    @property
    def current_balance(self) -> float:
        """Starting bankroll plus every recorded change."""
        total = self.session.scalar(
            select(func.coalesce(func.sum(BankrollHistory.amount), 0.0)).where(
                BankrollHistory.user_id == self.user.id
            )
        )
        return float(round_half_up(self.starting_bankroll + float(total or 0.0)))

    @property
    def pending_exposure(self) -> float:
        """Total amount at risk in pending picks and parlays."""
        picks = self.session.scalar(
            select(func.coalesce(func.sum(Pick.stake), 0.0)).where(
                Pick.user_id == self.user.id, Pick.status == PickStatus.PENDING
            )
        )
        parlays = self.session.scalar(
            select(func.coalesce(func.sum(Parlay.stake), 0.0)).where(
                Parlay.user_id == self.user.id, Parlay.status == PickStatus.PENDING
            )
        )
        return float(round_half_up(float(picks or 0.0) + float(parlays or 0.0)))

    def list_transactions(
        self,
        transaction_type: Optional[BankrollTransactionType] = None,
        page: int = 1,
        limit: int = 50,
    ) -> tuple[list[BankrollHistory], int]:
        """
        Get a page of bankroll history, newest first.

        Returns:
            Tuple of (entries, total matching entries)
        """
        conditions = [BankrollHistory.user_id == self.user.id]
        if transaction_type:
            conditions.append(BankrollHistory.type == transaction_type)

        total = self.session.scalar(
            select(func.count()).select_from(BankrollHistory).where(*conditions)
        )
        entries = self.session.scalars(
            select(BankrollHistory)
            .where(*conditions)
            .options(
                selectinload(BankrollHistory.pick),
                selectinload(BankrollHistory.parlay)
                .selectinload(Parlay.legs)
                .selectinload(ParlayLeg.pick),
            )
            .order_by(BankrollHistory.timestamp.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        ).all()

        return list(entries), int(total or 0)

    def history(self) -> list[BankrollHistory]:
        """All entries in chronological order."""
        return list(
            self.session.scalars(
                select(BankrollHistory)
                .where(BankrollHistory.user_id == self.user.id)
                .order_by(BankrollHistory.timestamp.asc())
            ).all()
        )

    def record_transaction(
        self,
        amount: float,
        transaction_type: BankrollTransactionType,
        notes: Optional[str] = None,
    ) -> BankrollHistory:
        """
        Record a manual deposit or withdrawal.

        Args:
            amount: Positive amount moved
            transaction_type: DEPOSIT or WITHDRAWAL
            notes: Optional free-text note

        Returns:
            The committed BankrollHistory row

        Raises:
            InvalidOperationError: If the type is not manual or a withdrawal
                exceeds the current balance
        """
        if transaction_type not in (
            BankrollTransactionType.DEPOSIT,
            BankrollTransactionType.WITHDRAWAL,
        ):
            raise InvalidOperationError("Only deposits and withdrawals can be recorded manually")
        if amount <= 0:
            raise InvalidOperationError("Amount must be greater than 0")

        if transaction_type == BankrollTransactionType.WITHDRAWAL:
            balance = self.current_balance
            if balance < amount:
                raise InvalidOperationError(
                    "Insufficient balance for withdrawal",
                    details={"current_balance": balance, "requested": amount},
                )
            signed = -amount
        else:
            signed = amount

        entry = BankrollHistory(
            user_id=self.user.id,
            amount=float(round_half_up(signed)),
            type=transaction_type,
            notes=notes or f"{transaction_type.value.lower()} transaction",
        )
        self.session.add(entry)
        self.session.commit()

        logger.info(
            f"Recorded {transaction_type.value} of ${amount:.2f} for user {self.user.id}"
        )
        return entry

    def find_entry(self, bet: Bet) -> Optional[BankrollHistory]:
        """Find the ledger entry owned by a pick or parlay."""
        column = (
            BankrollHistory.related_pick_id
            if isinstance(bet, Pick)
            else BankrollHistory.related_parlay_id
        )
        return self.session.scalars(
            select(BankrollHistory)
            .where(BankrollHistory.user_id == self.user.id, column == bet.id)
            .order_by(BankrollHistory.timestamp.asc())
        ).first()

    def record_stake(self, bet: Bet, notes: str) -> BankrollHistory:
        """Stage the STAKE entry for a newly placed bet."""
        entry = BankrollHistory(
            user_id=self.user.id,
            amount=-float(bet.stake),
            type=BankrollTransactionType.STAKE,
            notes=notes,
        )
        if isinstance(bet, Pick):
            entry.related_pick_id = bet.id
        else:
            entry.related_parlay_id = bet.id
        self.session.add(entry)
        # autoflush is off; later lookups in the same unit of work must see it
        self.session.flush()
        return entry

    def update_stake(self, bet: Bet) -> None:
        """Keep a pending bet's STAKE entry in line with its stake."""
        entry = self.find_entry(bet)
        if entry is None:
            logger.warning(f"No ledger entry for pending bet {bet.id}; recreating it")
            self.record_stake(bet, notes=f"Stake for bet {bet.id}")
            return
        entry.amount = -float(bet.stake)

    def settle(self, bet: Bet, notes: str) -> BankrollHistory:
        """
        Rewrite a bet's ledger entry to reflect its settled status.

        Exactly one entry is touched. A missing entry is recreated so the
        one-entry-per-bet invariant still holds after settlement.
        """
        status = PickStatus(bet.status)
        entry = self.find_entry(bet)
        if entry is None:
            logger.warning(f"No ledger entry for bet {bet.id}; creating one at settlement")
            entry = self.record_stake(bet, notes=notes)

        entry.amount = settlement_amount(status, bet.stake, bet.potential_win)
        entry.type = settlement_type(status)
        entry.notes = notes
        entry.timestamp = utcnow()

        logger.info(f"Settled bet {bet.id} as {status.value}: {entry.amount:+.2f}")
        return entry

    def remove_entries(self, bet: Bet) -> int:
        """Stage deletion of every ledger entry tied to a bet."""
        column = (
            BankrollHistory.related_pick_id
            if isinstance(bet, Pick)
            else BankrollHistory.related_parlay_id
        )
        entries = self.session.scalars(
            select(BankrollHistory).where(column == bet.id)
        ).all()
        for entry in entries:
            self.session.delete(entry)
        return len(entries)
