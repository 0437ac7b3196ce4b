"""Purchase Validation: pure field checks for new purchases.

Invariants:
    - Returns field -> list of messages; empty dict means valid
    - Description length is measured after trimming
    - Amount must be positive, at most MAX_AMOUNT and already exact to the cent
    - Range checked before the cent check: quantize overflows past 28 digits

Design Decisions:
    - Returns errors instead of raising: callers decide whether to raise
      (sanitizer reports, handler raises RequestValidationError)
"""

from datetime import date
from decimal import Decimal

from purchase_service.core.domain_types import MAX_AMOUNT, MAX_DESCRIPTION_LENGTH
from purchase_service.core.money import is_rounded_to_cent


def validate_purchase(
    description: str | None,
    transaction_date: date | None,
    amount: Decimal | None,
) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}

    if description is None or not description.strip():
        errors["description"] = ["Description is required."]
    elif len(description.strip()) > MAX_DESCRIPTION_LENGTH:
        errors["description"] = [
            f"Description must not exceed {MAX_DESCRIPTION_LENGTH} characters.",
        ]

    if transaction_date is None:
        errors["transaction_date"] = ["Transaction date is required."]

    if amount is None:
        errors["amount"] = ["Amount is required."]
    elif not amount.is_finite() or amount <= 0:
        errors["amount"] = ["Amount must be a positive value."]
    elif amount > MAX_AMOUNT:
        errors["amount"] = [f"Amount must not exceed {MAX_AMOUNT}."]
    elif not is_rounded_to_cent(amount):
        errors["amount"] = [
            "Amount must be rounded to the nearest cent (two decimal places).",
        ]

    return errors
