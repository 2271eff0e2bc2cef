"""
Pydantic schemas for data validation and serialization.

Used for API requests and responses and for the demo dataset.
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bet_tracker.betting.odds_converter import is_valid_american_odds
from bet_tracker.config.constants import (
    MAX_ABS_AMERICAN_ODDS,
    MIN_ABS_AMERICAN_ODDS,
    MIN_PARLAY_LEGS,
    BankrollTransactionType,
    BetType,
    PickStatus,
    Sport,
)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize an aware datetime to the naive UTC form the database stores."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _check_american_odds(v: Optional[int]) -> Optional[int]:
    if v is None:
        return v
    if not is_valid_american_odds(v):
        raise ValueError(
            f"American odds must be between {MIN_ABS_AMERICAN_ODDS} and "
            f"{MAX_ABS_AMERICAN_ODDS} in absolute value"
        )
    return v


class Pagination(BaseModel):
    """Pagination block attached to list responses."""

    page: int
    limit: int
    total: int
    pages: int


# =============================================================================
# AUTH & USER SCHEMAS
# =============================================================================
class SignupRequest(BaseModel):
    """Credentials sign-up payload."""

    name: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=255)
    password: str = Field(min_length=8, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginRequest(BaseModel):
    """Credentials sign-in payload."""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserResponse(BaseModel):
    """Public user profile."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: Optional[str] = None
    email: str
    image: Optional[str] = None
    starting_bankroll: float
    created_at: datetime
    updated_at: Optional[datetime] = None


class UserUpdate(BaseModel):
    """Profile fields a user may change."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    starting_bankroll: Optional[float] = Field(default=None, ge=0)


class SessionResponse(BaseModel):
    """Issued session token."""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse


# =============================================================================
# PICK SCHEMAS
# =============================================================================
class PickCreate(BaseModel):
    """Schema for recording a new pick."""

    sport: Sport
    bet_type: BetType
    description: str = Field(min_length=1, max_length=200)
    odds: int
    stake: float = Field(ge=0.01)
    game_date: datetime

    @field_validator("odds")
    @classmethod
    def validate_odds(cls, v: Optional[int]) -> Optional[int]:
        return _check_american_odds(v)

    @field_validator("game_date")
    @classmethod
    def normalize_game_date(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class PickUpdate(BaseModel):
    """Schema for editing or settling a pick."""

    status: Optional[PickStatus] = None
    description: Optional[str] = Field(default=None, min_length=1, max_length=200)
    odds: Optional[int] = None
    stake: Optional[float] = Field(default=None, ge=0.01)
    game_date: Optional[datetime] = None

    @field_validator("odds")
    @classmethod
    def validate_odds(cls, v: Optional[int]) -> Optional[int]:
        return _check_american_odds(v)

    @field_validator("game_date")
    @classmethod
    def normalize_game_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class PickResponse(BaseModel):
    """Schema for pick response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    sport: Sport
    bet_type: BetType
    description: str
    odds: int
    stake: float
    potential_win: float
    status: PickStatus
    game_date: datetime
    settled_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class PickListResponse(BaseModel):
    picks: list[PickResponse]
    pagination: Pagination


# =============================================================================
# PARLAY SCHEMAS
# =============================================================================
class ParlayCreate(BaseModel):
    """Schema for building a parlay from pending picks."""

    pick_ids: list[str] = Field(min_length=MIN_PARLAY_LEGS)
    stake: float = Field(ge=0.01)

    @field_validator("pick_ids")
    @classmethod
    def validate_unique_legs(cls, v: list[str]) -> list[str]:
        if len(set(v)) != len(v):
            raise ValueError("A pick can only appear once in a parlay")
        return v


class ParlayUpdate(BaseModel):
    """Schema for settling a parlay."""

    status: Optional[PickStatus] = None


class ParlayQuoteRequest(BaseModel):
    """Preview a parlay price without saving it."""

    odds: list[int] = Field(min_length=MIN_PARLAY_LEGS)
    stake: float = Field(ge=0.01)

    @field_validator("odds")
    @classmethod
    def validate_legs(cls, v: list[int]) -> list[int]:
        for odds in v:
            _check_american_odds(odds)
        return v


class ParlayQuoteResponse(BaseModel):
    legs: int
    decimal_odds: float
    total_odds: int
    stake: float
    potential_win: float


class ParlayLegResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    pick_id: str
    pick: PickResponse


class ParlayResponse(BaseModel):
    """Schema for parlay response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    total_odds: int
    stake: float
    potential_win: float
    status: PickStatus
    settled_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    legs: list[ParlayLegResponse] = Field(default_factory=list)


class ParlayListResponse(BaseModel):
    parlays: list[ParlayResponse]
    pagination: Pagination


# =============================================================================
# BANKROLL SCHEMAS
# =============================================================================
class TransactionCreate(BaseModel):
    """Schema for a manual deposit or withdrawal."""

    amount: float = Field(ge=0.01)
    type: BankrollTransactionType
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("type")
    @classmethod
    def validate_manual_type(cls, v: BankrollTransactionType) -> BankrollTransactionType:
        allowed = (BankrollTransactionType.DEPOSIT, BankrollTransactionType.WITHDRAWAL)
        if v not in allowed:
            raise ValueError("type must be DEPOSIT or WITHDRAWAL")
        return v


class RelatedPickSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    description: str
    sport: Sport


class RelatedLegSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    pick: RelatedPickSummary


class RelatedParlaySummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    legs: list[RelatedLegSummary] = Field(default_factory=list)


class BankrollEntryResponse(BaseModel):
    """Schema for a bankroll history row."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    amount: float
    type: BankrollTransactionType
    notes: Optional[str] = None
    timestamp: datetime
    related_pick_id: Optional[str] = None
    related_parlay_id: Optional[str] = None
    pick: Optional[RelatedPickSummary] = None
    parlay: Optional[RelatedParlaySummary] = None


class BankrollResponse(BaseModel):
    transactions: list[BankrollEntryResponse]
    current_balance: float
    starting_bankroll: float
    pending_exposure: float
    pagination: Pagination


# =============================================================================
# STATS SCHEMAS
# =============================================================================
class StatsOverview(BaseModel):
    total_picks: int
    pending_picks: int
    won_picks: int
    lost_picks: int
    push_picks: int
    settled_picks: int
    win_rate: float
    total_staked: float
    total_winnings: float
    total_losses: float
    total_pushes: float
    net_profit: float
    roi: float


class GroupStats(BaseModel):
    """Breakdown for one sport or bet type."""

    sport: Optional[Sport] = None
    bet_type: Optional[BetType] = None
    total_picks: int
    won: int
    lost: int
    pending: int
    win_rate: float
    staked: float
    winnings: float
    losses: float
    net_profit: float
    roi: float


class ParlayStats(BaseModel):
    total_parlays: int
    pending: int
    won: int
    lost: int
    push: int
    win_rate: float
    staked: float
    winnings: float
    losses: float
    net_profit: float
    roi: float


class BalancePoint(BaseModel):
    date: datetime
    balance: float
    amount: float
    type: BankrollTransactionType


class StatsResponse(BaseModel):
    overview: StatsOverview
    sport_stats: list[GroupStats]
    bet_type_stats: list[GroupStats]
    parlay_stats: ParlayStats
    recent_picks: list[PickResponse]
    balance_history: list[BalancePoint]
