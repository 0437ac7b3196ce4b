"""Money: cent rounding for the reference and target currencies.

Invariants:
    - Rounding is half-away-from-zero (0.005 -> 0.01, -0.005 -> -0.01), never banker's
    - Results always carry exactly two decimal places
"""

from decimal import Decimal, ROUND_HALF_UP

from purchase_service.core.domain_types import CENT


def round_to_cent(amount: Decimal) -> Decimal:
    """Round to two places. Decimal's ROUND_HALF_UP rounds halves away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def is_rounded_to_cent(amount: Decimal) -> bool:
    return amount == round_to_cent(amount)
