"""
Constants and enumerations for the bet tracking system.

Contains the sports, bet types, statuses and bankroll transaction types
shared by the ORM models, API schemas and statistics code.
"""
from enum import Enum
from typing import Final


# =============================================================================
# SPORTS & BET TYPES
# =============================================================================
class Sport(str, Enum):
    """Supported sports."""

    NFL = "NFL"
    NBA = "NBA"
    MLB = "MLB"
    NHL = "NHL"
    UFC = "UFC"


class BetType(str, Enum):
    """Supported single-pick bet types."""

    SPREAD = "SPREAD"
    MONEYLINE = "MONEYLINE"
    OVER_UNDER = "OVER_UNDER"


# =============================================================================
# LIFECYCLE
# =============================================================================
class PickStatus(str, Enum):
    """Lifecycle status shared by picks and parlays."""

    PENDING = "PENDING"
    WON = "WON"
    LOST = "LOST"
    PUSH = "PUSH"


SETTLED_STATUSES: Final[frozenset[PickStatus]] = frozenset(
    {PickStatus.WON, PickStatus.LOST, PickStatus.PUSH}
)


class BankrollTransactionType(str, Enum):
    """Kinds of bankroll history entries."""

    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    STAKE = "STAKE"  # Money at risk on a pending bet
    WIN = "WIN"
    LOSS = "LOSS"
    PUSH = "PUSH"


# Bankroll entry type recorded when a bet settles with a given status
SETTLEMENT_TRANSACTION_TYPES: Final[dict[PickStatus, BankrollTransactionType]] = {
    PickStatus.WON: BankrollTransactionType.WIN,
    PickStatus.LOST: BankrollTransactionType.LOSS,
    PickStatus.PUSH: BankrollTransactionType.PUSH,
}


# =============================================================================
# ODDS LIMITS
# =============================================================================
# American odds never fall inside (-100, +100)
MIN_ABS_AMERICAN_ODDS: Final[int] = 100
MAX_ABS_AMERICAN_ODDS: Final[int] = 1000

MIN_PARLAY_LEGS: Final[int] = 2
RECENT_PICKS_LIMIT: Final[int] = 10
