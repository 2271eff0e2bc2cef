"""
Bet Tracker - sports-betting pick, parlay and bankroll tracking.

Core package behind the REST API in ``api``.
"""

__version__ = "0.1.0"
