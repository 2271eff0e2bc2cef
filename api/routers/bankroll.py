"""Bankroll management endpoints."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.deps import (
    PageParams,
    bankroll_page,
    get_db,
    get_optional_user,
    get_settings,
    require_demo_mode,
    require_user,
)
from bet_tracker.config.constants import BankrollTransactionType
from bet_tracker.config.settings import Settings
from bet_tracker.database.models import BankrollHistory, User
from bet_tracker.database.schemas import (
    BankrollEntryResponse,
    BankrollResponse,
    TransactionCreate,
)
from bet_tracker.demo import get_demo_bankroll
from bet_tracker.tracking.bankroll_manager import BankrollManager
from bet_tracker.tracking.pagination import build_pagination

router = APIRouter()


@router.get("/bankroll", response_model=BankrollResponse)
def get_bankroll(
    transaction_type: Optional[BankrollTransactionType] = Query(None, alias="type"),
    paging: PageParams = Depends(bankroll_page),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Any:
    """
    Get bankroll history and current balance.

    Returns a page of ledger entries, newest first, together with the
    current balance, starting bankroll and pending exposure.
    """
    if user is None:
        require_demo_mode(settings)
        return get_demo_bankroll(transaction_type, paging.page, paging.limit)

    manager = BankrollManager(db, user)
    entries, total = manager.list_transactions(
        transaction_type=transaction_type, page=paging.page, limit=paging.limit
    )

    return BankrollResponse(
        transactions=[BankrollEntryResponse.model_validate(e) for e in entries],
        current_balance=manager.current_balance,
        starting_bankroll=manager.starting_bankroll,
        pending_exposure=manager.pending_exposure,
        pagination=build_pagination(paging.page, paging.limit, total),
    )


@router.post("/bankroll", response_model=BankrollEntryResponse, status_code=201)
def record_transaction(
    body: TransactionCreate,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
) -> BankrollHistory:
    """Record a deposit or withdrawal. Withdrawals cannot exceed the balance."""
    return BankrollManager(db, user).record_transaction(body.amount, body.type, body.notes)
