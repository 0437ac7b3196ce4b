"""Money: verifies half-away-from-zero cent rounding.

Tests:
    - Halves round away from zero in both directions
    - Results always carry two places
    - is_rounded_to_cent only accepts values exact to the cent
"""

from decimal import Decimal

from purchase_service.core.money import is_rounded_to_cent, round_to_cent


def test_half_cent_rounds_up():
    assert round_to_cent(Decimal("0.005")) == Decimal("0.01")
    assert round_to_cent(Decimal("2.675")) == Decimal("2.68")


def test_negative_half_cent_rounds_away_from_zero():
    assert round_to_cent(Decimal("-0.005")) == Decimal("-0.01")


def test_not_bankers_rounding():
    assert round_to_cent(Decimal("0.125")) == Decimal("0.13")


def test_result_has_two_places():
    assert str(round_to_cent(Decimal("25.5"))) == "25.50"
    assert str(round_to_cent(Decimal("7"))) == "7.00"


def test_is_rounded_to_cent():
    assert is_rounded_to_cent(Decimal("25.50"))
    assert is_rounded_to_cent(Decimal("25.5"))
    assert not is_rounded_to_cent(Decimal("25.505"))
