"""
Demo dataset served to visitors without a session.

A fixed month of picks across every sport plus three parlays built from
them. Potential wins, parlay prices and the bankroll ledger are derived
with the same odds and settlement functions the live services use, so the
demo numbers obey the same invariants as real accounts.
"""
from datetime import datetime
from typing import Optional

from bet_tracker.analysis.performance import build_stats, filter_picks
from bet_tracker.betting.odds_converter import (
    calculate_parlay,
    calculate_potential_win,
    round_half_up,
)
from bet_tracker.config.constants import (
    BankrollTransactionType,
    BetType,
    PickStatus,
    Sport,
)
from bet_tracker.database.schemas import (
    BankrollEntryResponse,
    BankrollResponse,
    ParlayLegResponse,
    ParlayListResponse,
    ParlayResponse,
    PickListResponse,
    PickResponse,
    RelatedLegSummary,
    RelatedParlaySummary,
    RelatedPickSummary,
    StatsResponse,
    UserResponse,
)
from bet_tracker.exceptions import NotFoundError
from bet_tracker.tracking.bankroll_manager import settlement_amount, settlement_type
from bet_tracker.tracking.pagination import build_pagination, slice_page

DEMO_STARTING_BANKROLL = 1000.0

DEMO_USER = UserResponse(
    id="demo-user",
    name="Demo User",
    email="demo@bettracker.com",
    image=None,
    starting_bankroll=DEMO_STARTING_BANKROLL,
    created_at=datetime(2024, 1, 1),
    updated_at=datetime(2024, 1, 1),
)


def _ts(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


# (sport, bet_type, description, odds, stake, status, game_date, created_at, settled_at)
_PICK_ROWS = [
    (Sport.NFL, BetType.SPREAD, "Chiefs -3.5", -110, 50, PickStatus.WON,
     "2024-01-15T20:00", "2024-01-15T18:00", "2024-01-16T02:30"),
    (Sport.NFL, BetType.OVER_UNDER, "Over 48.5", -105, 75, PickStatus.LOST,
     "2024-01-14T17:00", "2024-01-14T15:30", "2024-01-14T20:15"),
    (Sport.NFL, BetType.MONEYLINE, "Bills ML", 150, 40, PickStatus.PENDING,
     "2024-01-21T20:00", "2024-01-20T19:00", None),
    (Sport.NBA, BetType.SPREAD, "Lakers -7.5", -110, 60, PickStatus.WON,
     "2024-01-18T22:00", "2024-01-18T20:30", "2024-01-19T01:00"),
    (Sport.NBA, BetType.OVER_UNDER, "Over 225.5", -110, 55, PickStatus.LOST,
     "2024-01-17T20:00", "2024-01-17T18:45", "2024-01-17T22:30"),
    (Sport.NBA, BetType.MONEYLINE, "Warriors ML", 120, 45, PickStatus.PENDING,
     "2024-01-22T21:00", "2024-01-22T19:15", None),
    (Sport.MLB, BetType.MONEYLINE, "Yankees ML", -140, 70, PickStatus.WON,
     "2024-01-16T19:00", "2024-01-16T17:30", "2024-01-16T22:00"),
    (Sport.MLB, BetType.OVER_UNDER, "Over 8.5", -105, 50, PickStatus.PUSH,
     "2024-01-15T20:00", "2024-01-15T18:00", "2024-01-15T23:00"),
    (Sport.NHL, BetType.MONEYLINE, "Bruins ML", -120, 60, PickStatus.WON,
     "2024-01-19T20:00", "2024-01-19T18:30", "2024-01-19T22:30"),
    (Sport.NHL, BetType.OVER_UNDER, "Over 6.5", -110, 40, PickStatus.LOST,
     "2024-01-18T19:00", "2024-01-18T17:00", "2024-01-18T21:30"),
    (Sport.UFC, BetType.MONEYLINE, "Jon Jones ML", -200, 100, PickStatus.WON,
     "2024-01-20T22:00", "2024-01-20T20:00", "2024-01-21T00:30"),
    (Sport.UFC, BetType.OVER_UNDER, "Over 2.5 rounds", 110, 50, PickStatus.PENDING,
     "2024-01-27T21:00", "2024-01-27T19:00", None),
    (Sport.NFL, BetType.SPREAD, "Cowboys +4.5", -110, 80, PickStatus.WON,
     "2024-01-13T17:00", "2024-01-13T15:00", "2024-01-13T20:00"),
    (Sport.NBA, BetType.SPREAD, "Celtics -5.5", -110, 65, PickStatus.LOST,
     "2024-01-16T20:00", "2024-01-16T18:00", "2024-01-16T22:30"),
    (Sport.MLB, BetType.MONEYLINE, "Dodgers ML", 130, 50, PickStatus.WON,
     "2024-01-14T20:00", "2024-01-14T18:00", "2024-01-14T23:00"),
]

# (leg pick numbers, stake, status, created_at, settled_at)
_PARLAY_ROWS = [
    ((1, 4), 25, PickStatus.WON, "2024-01-18T21:00", "2024-01-19T01:00"),
    ((2, 5), 20, PickStatus.LOST, "2024-01-17T19:00", "2024-01-17T22:30"),
    ((3, 6), 30, PickStatus.PENDING, "2024-01-22T19:30", None),
]


def _build_picks() -> list[PickResponse]:
    picks = []
    for n, row in enumerate(_PICK_ROWS, start=1):
        sport, bet_type, description, odds, stake, status, game, created, settled = row
        picks.append(
            PickResponse(
                id=f"demo-pick-{n}",
                sport=sport,
                bet_type=bet_type,
                description=description,
                odds=odds,
                stake=float(stake),
                potential_win=float(calculate_potential_win(odds, stake)),
                status=status,
                game_date=_ts(game),
                settled_at=_ts(settled),
                created_at=_ts(created),
                updated_at=_ts(settled or created),
            )
        )
    return picks


def _build_parlays(picks: list[PickResponse]) -> list[ParlayResponse]:
    by_number = {n: pick for n, pick in enumerate(picks, start=1)}
    parlays = []
    for n, (legs, stake, status, created, settled) in enumerate(_PARLAY_ROWS, start=1):
        leg_picks = [by_number[i] for i in legs]
        quote = calculate_parlay([pick.odds for pick in leg_picks], stake)
        parlays.append(
            ParlayResponse(
                id=f"demo-parlay-{n}",
                total_odds=quote.american_odds,
                stake=float(stake),
                potential_win=float(quote.potential_win),
                status=status,
                settled_at=_ts(settled),
                created_at=_ts(created),
                updated_at=_ts(settled or created),
                legs=[
                    ParlayLegResponse(id=f"demo-leg-{n}-{i}", pick_id=pick.id, pick=pick)
                    for i, pick in enumerate(leg_picks, start=1)
                ],
            )
        )
    return parlays


def _build_bankroll(
    picks: list[PickResponse], parlays: list[ParlayResponse]
) -> list[BankrollEntryResponse]:
    """One ledger entry per bet, newest first."""
    entries = []
    for pick in picks:
        entries.append(
            BankrollEntryResponse(
                id=f"demo-bankroll-{pick.id}",
                amount=settlement_amount(pick.status, pick.stake, pick.potential_win),
                type=settlement_type(pick.status),
                notes=(
                    f"Settled pick: {pick.description} - {pick.status.value}"
                    if pick.settled_at
                    else f"Stake for pick: {pick.description}"
                ),
                timestamp=pick.settled_at or pick.created_at,
                related_pick_id=pick.id,
                pick=RelatedPickSummary(
                    id=pick.id, description=pick.description, sport=pick.sport
                ),
            )
        )
    for parlay in parlays:
        entries.append(
            BankrollEntryResponse(
                id=f"demo-bankroll-{parlay.id}",
                amount=settlement_amount(parlay.status, parlay.stake, parlay.potential_win),
                type=settlement_type(parlay.status),
                notes=(
                    f"Settled parlay with {len(parlay.legs)} legs - {parlay.status.value}"
                    if parlay.settled_at
                    else f"Stake for parlay with {len(parlay.legs)} legs"
                ),
                timestamp=parlay.settled_at or parlay.created_at,
                related_parlay_id=parlay.id,
                parlay=RelatedParlaySummary(
                    id=parlay.id,
                    legs=[
                        RelatedLegSummary(
                            pick=RelatedPickSummary(
                                id=leg.pick.id,
                                description=leg.pick.description,
                                sport=leg.pick.sport,
                            )
                        )
                        for leg in parlay.legs
                    ],
                ),
            )
        )
    return sorted(entries, key=lambda e: e.timestamp, reverse=True)


DEMO_PICKS = _build_picks()
DEMO_PARLAYS = _build_parlays(DEMO_PICKS)
DEMO_BANKROLL = _build_bankroll(DEMO_PICKS, DEMO_PARLAYS)


def get_demo_user() -> UserResponse:
    return DEMO_USER


def list_demo_picks(
    sport: Optional[Sport] = None,
    bet_type: Optional[BetType] = None,
    status: Optional[PickStatus] = None,
    page: int = 1,
    limit: int = 20,
) -> PickListResponse:
    picks = [
        p
        for p in filter_picks(DEMO_PICKS, sport=sport, bet_type=bet_type)
        if status is None or p.status == status
    ]
    picks.sort(key=lambda p: p.created_at, reverse=True)
    return PickListResponse(
        picks=slice_page(picks, page, limit),
        pagination=build_pagination(page, limit, len(picks)),
    )


def get_demo_pick(pick_id: str) -> PickResponse:
    for pick in DEMO_PICKS:
        if pick.id == pick_id:
            return pick
    raise NotFoundError("Pick not found")


def list_demo_parlays(
    status: Optional[PickStatus] = None, page: int = 1, limit: int = 20
) -> ParlayListResponse:
    parlays = [p for p in DEMO_PARLAYS if status is None or p.status == status]
    parlays.sort(key=lambda p: p.created_at, reverse=True)
    return ParlayListResponse(
        parlays=slice_page(parlays, page, limit),
        pagination=build_pagination(page, limit, len(parlays)),
    )


def get_demo_parlay(parlay_id: str) -> ParlayResponse:
    for parlay in DEMO_PARLAYS:
        if parlay.id == parlay_id:
            return parlay
    raise NotFoundError("Parlay not found")


def get_demo_bankroll(
    transaction_type: Optional[BankrollTransactionType] = None,
    page: int = 1,
    limit: int = 50,
) -> BankrollResponse:
    entries = [
        e for e in DEMO_BANKROLL if transaction_type is None or e.type == transaction_type
    ]
    pending = [p.stake for p in DEMO_PICKS if p.status == PickStatus.PENDING]
    pending += [p.stake for p in DEMO_PARLAYS if p.status == PickStatus.PENDING]

    return BankrollResponse(
        transactions=slice_page(entries, page, limit),
        current_balance=float(
            round_half_up(DEMO_STARTING_BANKROLL + sum(e.amount for e in DEMO_BANKROLL))
        ),
        starting_bankroll=DEMO_STARTING_BANKROLL,
        pending_exposure=float(round_half_up(sum(pending))),
        pagination=build_pagination(page, limit, len(entries)),
    )


def get_demo_stats(
    sport: Optional[Sport] = None,
    bet_type: Optional[BetType] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> StatsResponse:
    picks = filter_picks(DEMO_PICKS, sport, bet_type, start_date, end_date)
    parlays = filter_picks(DEMO_PARLAYS, start_date=start_date, end_date=end_date)
    return build_stats(picks, parlays, DEMO_BANKROLL, DEMO_STARTING_BANKROLL)
