"""
Betting arithmetic.

Provides tools for:
- American/decimal odds conversion
- Single-pick potential win
- Parlay pricing
"""

from .odds_converter import (
    ParlayQuote,
    american_to_decimal,
    american_to_implied_probability,
    calculate_parlay,
    calculate_potential_win,
    combine_decimal_odds,
    decimal_to_american,
    format_american_odds,
    is_valid_american_odds,
    profit_per_unit,
    round_half_up,
)

__all__ = [
    "ParlayQuote",
    "american_to_decimal",
    "american_to_implied_probability",
    "calculate_parlay",
    "calculate_potential_win",
    "combine_decimal_odds",
    "decimal_to_american",
    "format_american_odds",
    "is_valid_american_odds",
    "profit_per_unit",
    "round_half_up",
]
