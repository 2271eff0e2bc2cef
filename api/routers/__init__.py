"""API routers for Bet Tracker."""

from . import auth, bankroll, health, parlays, picks, stats, user

__all__ = [
    "auth",
    "bankroll",
    "health",
    "parlays",
    "picks",
    "stats",
    "user",
]
