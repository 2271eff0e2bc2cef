"""
Odds conversion and payout calculation utilities.

Provides functions for converting between American and decimal odds,
computing the potential win of a single pick and combining legs into a
parlay price.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, NamedTuple, Union

from bet_tracker.config.constants import (
    MAX_ABS_AMERICAN_ODDS,
    MIN_ABS_AMERICAN_ODDS,
    MIN_PARLAY_LEGS,
)

Number = Union[int, float, Decimal]

CENTS = Decimal("0.01")
HUNDRED = Decimal(100)


class ParlayQuote(NamedTuple):
    """Combined price and payout for a set of parlay legs."""

    legs: int
    decimal_odds: Decimal
    american_odds: int
    stake: Decimal
    potential_win: Decimal


def _to_decimal(value: Number) -> Decimal:
    # str() keeps 0.1 as Decimal('0.1') instead of its binary expansion
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Number, places: int = 2) -> Decimal:
    """
    Round a value half-up to a fixed number of decimal places.

    Examples:
        >>> round_half_up(90.905)
        Decimal('90.91')
        >>> round_half_up(Decimal('2.5'), 0)
        Decimal('3')
    """
    exponent = Decimal(1).scaleb(-places)
    return _to_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)


def is_valid_american_odds(american: int) -> bool:
    """
    Check that a price is expressible in American notation.

    Examples:
        >>> is_valid_american_odds(-110)
        True
        >>> is_valid_american_odds(50)
        False
    """
    return MIN_ABS_AMERICAN_ODDS <= abs(american) <= MAX_ABS_AMERICAN_ODDS


def profit_per_unit(american: int) -> Decimal:
    """
    Profit returned on a one-unit winning stake.

    Underdogs (+odds) pay odds/100; favorites (-odds) pay 100/|odds|.

    Raises:
        ValueError: If the odds are zero
    """
    if american == 0:
        raise ValueError("American odds cannot be zero")
    if american > 0:
        return Decimal(american) / HUNDRED
    return HUNDRED / Decimal(-american)


def american_to_decimal(american: int) -> Decimal:
    """
    Decimal price of American odds: the unit profit plus the returned stake.

    Examples:
        >>> american_to_decimal(-200)
        Decimal('1.5')
        >>> american_to_decimal(150)
        Decimal('2.5')
    """
    return profit_per_unit(american) + 1


def decimal_to_american(decimal_odds: Number) -> int:
    """
    American odds for a decimal price, rounded half-up to a whole number.

    Prices of 2.0 and above map to +odds, shorter prices to -odds.

    Raises:
        ValueError: If decimal_odds is not greater than 1

    Examples:
        >>> decimal_to_american(Decimal('1.91'))
        -110
        >>> decimal_to_american(Decimal('2.50'))
        150
    """
    price = _to_decimal(decimal_odds)
    if price <= 1:
        raise ValueError(f"Decimal odds must be greater than 1, got {price}")

    profit = price - 1
    american = profit * HUNDRED if profit >= 1 else -HUNDRED / profit
    return int(american.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def american_to_implied_probability(american: int) -> Decimal:
    """
    Break-even win probability implied by a price (vig included).

    Computed as the amount risked over the total return.

    Examples:
        >>> american_to_implied_probability(150)
        Decimal('0.4')
        >>> american_to_implied_probability(-300)
        Decimal('0.75')
    """
    if american == 0:
        raise ValueError("American odds cannot be zero")
    risk, payout = (HUNDRED, Decimal(american)) if american > 0 else (Decimal(-american), HUNDRED)
    return risk / (risk + payout)


def calculate_potential_win(american_odds: int, stake: Number) -> Decimal:
    """
    Calculate the profit a winning single pick pays (stake excluded).

    Args:
        american_odds: American odds of the pick
        stake: Amount wagered

    Returns:
        Potential win rounded half-up to cents

    Examples:
        >>> calculate_potential_win(150, 100)
        Decimal('150.00')
        >>> calculate_potential_win(-110, 100)
        Decimal('90.91')
    """
    win = profit_per_unit(american_odds) * _to_decimal(stake)
    return win.quantize(CENTS, rounding=ROUND_HALF_UP)


def combine_decimal_odds(american_odds: Iterable[int]) -> Decimal:
    """
    Multiply the decimal price of every leg.

    Examples:
        >>> combine_decimal_odds([150, 150])
        Decimal('6.25')
    """
    total = Decimal(1)
    for odds in american_odds:
        total *= american_to_decimal(odds)
    return total


def calculate_parlay(american_odds: Iterable[int], stake: Number) -> ParlayQuote:
    """
    Price a parlay from its legs.

    The combined decimal odds are converted back to American notation and
    the potential win is (decimal - 1) x stake, rounded to cents.

    Args:
        american_odds: American odds of each leg
        stake: Amount wagered on the parlay

    Returns:
        ParlayQuote with the combined prices and potential win

    Raises:
        ValueError: If fewer than two legs are given

    Examples:
        >>> quote = calculate_parlay([-110, -110], 100)
        >>> quote.american_odds, quote.potential_win
        (264, Decimal('264.46'))
    """
    legs = list(american_odds)
    if len(legs) < MIN_PARLAY_LEGS:
        raise ValueError(f"Parlay must have at least {MIN_PARLAY_LEGS} legs")

    stake = _to_decimal(stake)
    decimal_odds = combine_decimal_odds(legs)
    potential_win = ((decimal_odds - 1) * stake).quantize(CENTS, rounding=ROUND_HALF_UP)

    return ParlayQuote(
        legs=len(legs),
        decimal_odds=decimal_odds,
        american_odds=decimal_to_american(decimal_odds),
        stake=stake,
        potential_win=potential_win,
    )


def format_american_odds(odds: int) -> str:
    """
    Display form of a price: favorites keep their minus sign, underdogs get a plus.

    Examples:
        >>> format_american_odds(-110)
        '-110'
        >>> format_american_odds(150)
        '+150'
    """
    return f"{odds:+d}"
