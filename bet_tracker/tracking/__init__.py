"""Services that record bets and keep the bankroll ledger consistent."""
from .accounts import AccountService
from .bankroll_manager import BankrollManager, settlement_amount, settlement_type
from .pagination import build_pagination, slice_page
from .parlay_service import ParlayService
from .pick_service import PickService
from .statistics import StatsService

__all__ = [
    "AccountService",
    "BankrollManager",
    "ParlayService",
    "PickService",
    "StatsService",
    "build_pagination",
    "settlement_amount",
    "settlement_type",
    "slice_page",
]
