"""
Performance statistics over recorded bets.

One set of aggregation functions serves the stats endpoint, the demo
dataset and the CLI summary. They operate on anything exposing the pick
attributes (ORM rows or response schemas alike).

Conventions:
- win_rate = won / settled x 100 (pushes count as settled)
- net_profit = winnings on WON bets - stakes of LOST bets
- roi = net_profit / total staked x 100
"""
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from bet_tracker.betting.odds_converter import round_half_up
from bet_tracker.config.constants import (
    RECENT_PICKS_LIMIT,
    BetType,
    PickStatus,
    Sport,
)
from bet_tracker.database.schemas import (
    BalancePoint,
    GroupStats,
    ParlayStats,
    PickResponse,
    StatsOverview,
    StatsResponse,
)


@dataclass
class BetTally:
    """Counts and sums over a group of bets."""

    total: int = 0
    pending: int = 0
    won: int = 0
    lost: int = 0
    push: int = 0
    staked: float = 0.0
    winnings: float = 0.0
    losses: float = 0.0
    pushes: float = 0.0

    @property
    def settled(self) -> int:
        return self.total - self.pending

    @property
    def net_profit(self) -> float:
        return self.winnings - self.losses

    @property
    def win_rate(self) -> float:
        return self.won / self.settled * 100 if self.settled > 0 else 0.0

    @property
    def roi(self) -> float:
        return self.net_profit / self.staked * 100 if self.staked > 0 else 0.0


def _round(value: float) -> float:
    return float(round_half_up(value))


def tally(bets: Iterable[Any]) -> BetTally:
    """
    Count bets by status and sum their stakes and results.

    Args:
        bets: Objects with ``status``, ``stake`` and ``potential_win``

    Returns:
        BetTally for the group
    """
    result = BetTally()
    for bet in bets:
        result.total += 1
        result.staked += bet.stake
        if bet.status == PickStatus.PENDING:
            result.pending += 1
        elif bet.status == PickStatus.WON:
            result.won += 1
            result.winnings += bet.potential_win
        elif bet.status == PickStatus.LOST:
            result.lost += 1
            result.losses += bet.stake
        elif bet.status == PickStatus.PUSH:
            result.push += 1
            result.pushes += bet.stake
    return result


def summarize_picks(picks: Iterable[Any]) -> StatsOverview:
    t = tally(picks)
    return StatsOverview(
        total_picks=t.total,
        pending_picks=t.pending,
        won_picks=t.won,
        lost_picks=t.lost,
        push_picks=t.push,
        settled_picks=t.settled,
        win_rate=_round(t.win_rate),
        total_staked=_round(t.staked),
        total_winnings=_round(t.winnings),
        total_losses=_round(t.losses),
        total_pushes=_round(t.pushes),
        net_profit=_round(t.net_profit),
        roi=_round(t.roi),
    )


def _group_stats(t: BetTally, **key: Any) -> GroupStats:
    return GroupStats(
        **key,
        total_picks=t.total,
        won=t.won,
        lost=t.lost,
        pending=t.pending,
        win_rate=_round(t.win_rate),
        staked=_round(t.staked),
        winnings=_round(t.winnings),
        losses=_round(t.losses),
        net_profit=_round(t.net_profit),
        roi=_round(t.roi),
    )


def sport_breakdown(picks: Sequence[Any]) -> list[GroupStats]:
    """Stats for every sport, including sports with no picks."""
    return [
        _group_stats(tally(p for p in picks if p.sport == sport), sport=sport)
        for sport in Sport
    ]


def bet_type_breakdown(picks: Sequence[Any]) -> list[GroupStats]:
    """Stats for every bet type, including types with no picks."""
    return [
        _group_stats(tally(p for p in picks if p.bet_type == bet_type), bet_type=bet_type)
        for bet_type in BetType
    ]


def summarize_parlays(parlays: Iterable[Any]) -> ParlayStats:
    t = tally(parlays)
    return ParlayStats(
        total_parlays=t.total,
        pending=t.pending,
        won=t.won,
        lost=t.lost,
        push=t.push,
        win_rate=_round(t.win_rate),
        staked=_round(t.staked),
        winnings=_round(t.winnings),
        losses=_round(t.losses),
        net_profit=_round(t.net_profit),
        roi=_round(t.roi),
    )


def balance_history(entries: Iterable[Any], starting_bankroll: float) -> list[BalancePoint]:
    """
    Running balance after each bankroll entry.

    Args:
        entries: Objects with ``timestamp``, ``amount`` and ``type``
        starting_bankroll: Balance before the first entry

    Returns:
        One point per entry in chronological order
    """
    running = float(starting_bankroll)
    points = []
    for entry in sorted(entries, key=lambda e: e.timestamp):
        running += entry.amount
        points.append(
            BalancePoint(
                date=entry.timestamp,
                balance=_round(running),
                amount=entry.amount,
                type=entry.type,
            )
        )
    return points


def build_stats(
    picks: Sequence[Any],
    parlays: Sequence[Any],
    entries: Iterable[Any],
    starting_bankroll: float,
    recent_limit: int = RECENT_PICKS_LIMIT,
) -> StatsResponse:
    """
    Assemble the full statistics payload.

    Args:
        picks: Picks to aggregate
        parlays: Parlays to aggregate
        entries: Bankroll history entries for the balance curve
        starting_bankroll: Balance the curve starts from
        recent_limit: Number of most recent picks to include

    Returns:
        StatsResponse
    """
    recent = sorted(picks, key=lambda p: p.created_at, reverse=True)[:recent_limit]

    return StatsResponse(
        overview=summarize_picks(picks),
        sport_stats=sport_breakdown(picks),
        bet_type_stats=bet_type_breakdown(picks),
        parlay_stats=summarize_parlays(parlays),
        recent_picks=[PickResponse.model_validate(p) for p in recent],
        balance_history=balance_history(entries, starting_bankroll),
    )


def filter_picks(
    picks: Iterable[Any],
    sport: Optional[Sport] = None,
    bet_type: Optional[BetType] = None,
    start_date: Optional[Any] = None,
    end_date: Optional[Any] = None,
) -> list[Any]:
    """Apply the stats filters to an in-memory collection."""
    result = []
    for pick in picks:
        if sport and pick.sport != sport:
            continue
        if bet_type and pick.bet_type != bet_type:
            continue
        if start_date and pick.created_at < start_date:
            continue
        if end_date and pick.created_at > end_date:
            continue
        result.append(pick)
    return result
