"""Settings and shared constants."""

from .constants import (
    BankrollTransactionType,
    BetType,
    PickStatus,
    Sport,
)
from .settings import PaginationSettings, Settings, get_settings

__all__ = [
    "BankrollTransactionType",
    "BetType",
    "PickStatus",
    "Sport",
    "PaginationSettings",
    "Settings",
    "get_settings",
]
