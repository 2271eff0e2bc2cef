from datetime import datetime
from types import SimpleNamespace

import pytest

from bet_tracker.analysis.performance import (
    balance_history,
    bet_type_breakdown,
    build_stats,
    filter_picks,
    sport_breakdown,
    summarize_parlays,
    summarize_picks,
)
from bet_tracker.config.constants import BankrollTransactionType, BetType, PickStatus, Sport
from bet_tracker.demo import DEMO_PICKS


def _pick(sport, bet_type, status, stake, potential_win, created="2024-01-10T12:00"):
    return SimpleNamespace(
        sport=sport,
        bet_type=bet_type,
        status=status,
        stake=stake,
        potential_win=potential_win,
        created_at=datetime.fromisoformat(created),
    )


@pytest.fixture
def picks():
    return [
        _pick(Sport.NFL, BetType.SPREAD, PickStatus.WON, 100, 90.91, "2024-01-01T12:00"),
        _pick(Sport.NFL, BetType.MONEYLINE, PickStatus.LOST, 40, 60, "2024-01-02T12:00"),
        _pick(Sport.NBA, BetType.SPREAD, PickStatus.PUSH, 20, 18.18, "2024-01-03T12:00"),
        _pick(Sport.MLB, BetType.OVER_UNDER, PickStatus.PENDING, 30, 27.27, "2024-01-04T12:00"),
    ]


def test_overview_counts_and_totals(picks):
    overview = summarize_picks(picks)

    assert overview.total_picks == 4
    assert overview.pending_picks == 1
    assert overview.won_picks == 1
    assert overview.lost_picks == 1
    assert overview.push_picks == 1
    assert overview.settled_picks == 3
    assert overview.total_staked == 190
    assert overview.total_winnings == 90.91
    assert overview.total_losses == 40
    assert overview.total_pushes == 20
    assert overview.net_profit == 50.91


def test_win_rate_counts_pushes_as_settled(picks):
    assert summarize_picks(picks).win_rate == 33.33


def test_roi_is_net_over_everything_staked(picks):
    # 50.91 / 190
    assert summarize_picks(picks).roi == 26.79


def test_empty_overview_has_zero_rates():
    overview = summarize_picks([])
    assert overview.total_picks == 0
    assert overview.win_rate == 0
    assert overview.roi == 0


def test_breakdowns_list_every_member(picks):
    by_sport = sport_breakdown(picks)
    by_type = bet_type_breakdown(picks)

    assert [row.sport for row in by_sport] == list(Sport)
    assert [row.bet_type for row in by_type] == list(BetType)

    nfl = by_sport[0]
    assert nfl.total_picks == 2
    assert nfl.won == 1
    assert nfl.lost == 1
    assert nfl.win_rate == 50.0
    assert nfl.net_profit == 50.91
    assert nfl.roi == 36.36

    ufc = next(row for row in by_sport if row.sport == Sport.UFC)
    assert ufc.total_picks == 0
    assert ufc.roi == 0


def test_parlay_summary():
    parlays = [
        SimpleNamespace(status=PickStatus.WON, stake=25, potential_win=62.5),
        SimpleNamespace(status=PickStatus.LOST, stake=20, potential_win=84),
        SimpleNamespace(status=PickStatus.PENDING, stake=30, potential_win=114),
    ]
    stats = summarize_parlays(parlays)

    assert stats.total_parlays == 3
    assert stats.won == 1
    assert stats.lost == 1
    assert stats.pending == 1
    assert stats.win_rate == 50.0
    assert stats.net_profit == 42.5
    assert stats.staked == 75


def test_balance_history_is_a_running_total_in_time_order():
    entries = [
        SimpleNamespace(
            timestamp=datetime(2024, 1, 1), amount=-100.0, type=BankrollTransactionType.STAKE
        ),
        SimpleNamespace(
            timestamp=datetime(2024, 1, 3), amount=90.91, type=BankrollTransactionType.WIN
        ),
        SimpleNamespace(
            timestamp=datetime(2024, 1, 2), amount=500.0, type=BankrollTransactionType.DEPOSIT
        ),
    ]
    points = balance_history(entries, 1000)

    assert [p.balance for p in points] == [900.0, 1400.0, 1490.91]
    assert [p.type for p in points] == [
        BankrollTransactionType.STAKE,
        BankrollTransactionType.DEPOSIT,
        BankrollTransactionType.WIN,
    ]


def test_filter_picks_by_sport_and_date(picks):
    assert len(filter_picks(picks, sport=Sport.NFL)) == 2
    assert len(filter_picks(picks, bet_type=BetType.SPREAD)) == 2
    assert len(filter_picks(picks, start_date=datetime(2024, 1, 2))) == 3
    assert len(filter_picks(picks, end_date=datetime(2024, 1, 2, 12))) == 2


def test_build_stats_keeps_ten_most_recent_picks():
    stats = build_stats(DEMO_PICKS, [], [], 1000)

    assert len(stats.recent_picks) == 10
    created = [p.created_at for p in stats.recent_picks]
    assert created == sorted(created, reverse=True)
    assert stats.overview.total_picks == len(DEMO_PICKS)
