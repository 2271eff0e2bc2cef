"""Performance statistics."""
from .performance import (
    BetTally,
    balance_history,
    bet_type_breakdown,
    build_stats,
    filter_picks,
    sport_breakdown,
    summarize_parlays,
    summarize_picks,
    tally,
)

__all__ = [
    "BetTally",
    "balance_history",
    "bet_type_breakdown",
    "build_stats",
    "filter_picks",
    "sport_breakdown",
    "summarize_parlays",
    "summarize_picks",
    "tally",
]
