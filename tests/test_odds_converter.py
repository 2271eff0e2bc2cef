from decimal import Decimal

import pytest

from bet_tracker.betting.odds_converter import (
    american_to_decimal,
    american_to_implied_probability,
    calculate_parlay,
    calculate_potential_win,
    decimal_to_american,
    format_american_odds,
    is_valid_american_odds,
    round_half_up,
)


def test_positive_odds_pay_odds_over_100_per_unit():
    assert calculate_potential_win(150, 100) == Decimal("150.00")
    assert calculate_potential_win(200, 25) == Decimal("50.00")


def test_negative_odds_pay_100_over_odds_per_unit():
    assert calculate_potential_win(-110, 100) == Decimal("90.91")
    assert calculate_potential_win(-200, 100) == Decimal("50.00")
    assert calculate_potential_win(-105, 50) == Decimal("47.62")


def test_potential_win_rejects_zero_odds():
    with pytest.raises(ValueError):
        calculate_potential_win(0, 100)


def test_round_half_up_avoids_float_artifacts():
    # round(2.675, 2) gives 2.67 on binary floats
    assert round_half_up(2.675) == Decimal("2.68")
    assert round_half_up(Decimal("0.5"), 0) == Decimal("1")


def test_american_decimal_conversions():
    assert american_to_decimal(150) == Decimal("2.5")
    assert american_to_decimal(-200) == Decimal("1.5")
    assert decimal_to_american(Decimal("2.5")) == 150
    assert decimal_to_american(Decimal("1.5")) == -200
    assert decimal_to_american(Decimal("1.91")) == -110


def test_decimal_to_american_rejects_even_or_lower():
    with pytest.raises(ValueError):
        decimal_to_american(Decimal("1"))


def test_implied_probability():
    assert american_to_implied_probability(150) == Decimal("0.4")
    assert american_to_implied_probability(-300) == Decimal("0.75")
    assert american_to_implied_probability(100) == Decimal("0.5")
    assert american_to_implied_probability(-110).quantize(Decimal("0.0001")) == Decimal("0.5238")


def test_valid_american_odds_range():
    assert is_valid_american_odds(-110)
    assert is_valid_american_odds(100)
    assert is_valid_american_odds(-1000)
    assert not is_valid_american_odds(0)
    assert not is_valid_american_odds(50)
    assert not is_valid_american_odds(1500)


def test_parlay_multiplies_decimal_odds():
    quote = calculate_parlay([-110, -110], 100)
    assert quote.legs == 2
    assert quote.american_odds == 264
    assert quote.potential_win == Decimal("264.46")


def test_parlay_of_plus_money_legs():
    quote = calculate_parlay([150, 150], 10)
    assert quote.decimal_odds == Decimal("6.25")
    assert quote.american_odds == 525
    assert quote.potential_win == Decimal("52.50")


def test_parlay_needs_two_legs():
    with pytest.raises(ValueError):
        calculate_parlay([-110], 100)


def test_format_american_odds():
    assert format_american_odds(150) == "+150"
    assert format_american_odds(-110) == "-110"
