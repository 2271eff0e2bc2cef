"""Read-only demo dataset for visitors without a session."""
from .demo_data import (
    DEMO_BANKROLL,
    DEMO_PARLAYS,
    DEMO_PICKS,
    DEMO_USER,
    get_demo_bankroll,
    get_demo_parlay,
    get_demo_pick,
    get_demo_stats,
    get_demo_user,
    list_demo_parlays,
    list_demo_picks,
)

__all__ = [
    "DEMO_BANKROLL",
    "DEMO_PARLAYS",
    "DEMO_PICKS",
    "DEMO_USER",
    "get_demo_bankroll",
    "get_demo_parlay",
    "get_demo_pick",
    "get_demo_stats",
    "get_demo_user",
    "list_demo_parlays",
    "list_demo_picks",
]
