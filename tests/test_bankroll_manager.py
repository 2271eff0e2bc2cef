from datetime import datetime

import pytest

from bet_tracker.config.constants import BankrollTransactionType, BetType, PickStatus, Sport
from bet_tracker.database.models import BankrollHistory
from bet_tracker.database.schemas import PickCreate, PickUpdate
from bet_tracker.exceptions import InvalidOperationError
from bet_tracker.tracking.bankroll_manager import BankrollManager, settlement_amount
from bet_tracker.tracking.pick_service import PickService


def _new_pick(session, user, odds=-110, stake=100.0):
    return PickService(session, user).create_pick(
        PickCreate(
            sport=Sport.NFL,
            bet_type=BetType.SPREAD,
            description="Eagles -2.5",
            odds=odds,
            stake=stake,
            game_date=datetime(2024, 9, 8, 20),
        )
    )


def _entries(session, pick):
    return session.query(BankrollHistory).filter_by(related_pick_id=pick.id).all()


@pytest.mark.parametrize(
    "status,expected",
    [
        (PickStatus.WON, 90.91),
        (PickStatus.LOST, -100.0),
        (PickStatus.PUSH, 0.0),
        (PickStatus.PENDING, -100.0),
    ],
)
def test_settlement_amount(status, expected):
    assert settlement_amount(status, 100.0, 90.91) == expected


def test_deposit_and_withdrawal_move_the_balance(session, user):
    manager = BankrollManager(session, user)

    manager.record_transaction(250.0, BankrollTransactionType.DEPOSIT)
    manager.record_transaction(100.0, BankrollTransactionType.WITHDRAWAL, notes="cash out")

    assert manager.current_balance == 1150.0
    entries, total = manager.list_transactions()
    assert total == 2
    assert {e.amount for e in entries} == {250.0, -100.0}


def test_withdrawal_cannot_exceed_balance(session, user):
    manager = BankrollManager(session, user)

    with pytest.raises(InvalidOperationError) as exc:
        manager.record_transaction(1500.0, BankrollTransactionType.WITHDRAWAL)

    assert exc.value.details["current_balance"] == 1000.0
    assert manager.current_balance == 1000.0


def test_only_manual_types_can_be_recorded(session, user):
    with pytest.raises(InvalidOperationError):
        BankrollManager(session, user).record_transaction(10.0, BankrollTransactionType.WIN)


def test_new_pick_holds_its_stake(session, user):
    pick = _new_pick(session, user)
    manager = BankrollManager(session, user)

    [entry] = _entries(session, pick)
    assert entry.type == BankrollTransactionType.STAKE
    assert entry.amount == -100.0
    assert manager.current_balance == 900.0
    assert manager.pending_exposure == 100.0


@pytest.mark.parametrize(
    "status,amount,entry_type,balance",
    [
        (PickStatus.WON, 90.91, BankrollTransactionType.WIN, 1090.91),
        (PickStatus.LOST, -100.0, BankrollTransactionType.LOSS, 900.0),
        (PickStatus.PUSH, 0.0, BankrollTransactionType.PUSH, 1000.0),
    ],
)
def test_settlement_rewrites_exactly_one_entry(session, user, status, amount, entry_type, balance):
    pick = _new_pick(session, user)
    PickService(session, user).update_pick(pick.id, PickUpdate(status=status))

    entries = _entries(session, pick)
    assert len(entries) == 1
    assert entries[0].amount == amount
    assert entries[0].type == entry_type
    assert BankrollManager(session, user).current_balance == balance
    assert pick.settled_at is not None


def test_settling_twice_is_guarded(session, user):
    service = PickService(session, user)
    pick = _new_pick(session, user)
    service.update_pick(pick.id, PickUpdate(status=PickStatus.WON))

    # Same status again changes nothing
    service.update_pick(pick.id, PickUpdate(status=PickStatus.WON))
    assert BankrollManager(session, user).current_balance == 1090.91

    with pytest.raises(InvalidOperationError):
        service.update_pick(pick.id, PickUpdate(status=PickStatus.LOST))
    with pytest.raises(InvalidOperationError):
        service.update_pick(pick.id, PickUpdate(stake=500.0))

    assert len(_entries(session, pick)) == 1
    assert BankrollManager(session, user).current_balance == 1090.91


def test_stake_edit_keeps_ledger_in_step(session, user):
    service = PickService(session, user)
    pick = _new_pick(session, user)

    updated = service.update_pick(pick.id, PickUpdate(stake=50.0, odds=150))

    assert updated.potential_win == 75.0
    [entry] = _entries(session, pick)
    assert entry.amount == -50.0


def test_settling_recreates_a_missing_entry(session, user):
    pick = _new_pick(session, user)
    for entry in _entries(session, pick):
        session.delete(entry)
    session.commit()

    PickService(session, user).update_pick(pick.id, PickUpdate(status=PickStatus.LOST))

    [entry] = _entries(session, pick)
    assert entry.type == BankrollTransactionType.LOSS
    assert entry.amount == -100.0


def test_stake_change_and_settlement_on_missing_entry_write_one_row(session, user):
    pick = _new_pick(session, user)
    for entry in _entries(session, pick):
        session.delete(entry)
    session.commit()

    PickService(session, user).update_pick(
        pick.id, PickUpdate(stake=50, status=PickStatus.WON)
    )

    [entry] = _entries(session, pick)
    assert entry.type == BankrollTransactionType.WIN
    assert entry.amount == 45.45


def test_history_is_chronological(session, user):
    manager = BankrollManager(session, user)
    manager.record_transaction(10.0, BankrollTransactionType.DEPOSIT)
    _new_pick(session, user)

    history = manager.history()
    assert [e.type for e in history] == [
        BankrollTransactionType.DEPOSIT,
        BankrollTransactionType.STAKE,
    ]
