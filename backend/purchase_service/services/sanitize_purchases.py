"""Purchase Sanitizers: normalize commands before validation.

Invariants:
    - Description trimmed; amount rounded half-away-from-zero to the cent
    - Validation runs on the sanitized values (a 51-char description padded with
      spaces passes once trimmed)
"""

import dataclasses
from decimal import Decimal

from purchase_service.core.domain_types import MAX_AMOUNT
from purchase_service.core.money import round_to_cent
from purchase_service.core.validate_purchase import validate_purchase
from purchase_service.services.purchase_requests import CreatePurchaseCommand


def _round_amount(amount: Decimal | None) -> Decimal | None:
    # Out-of-range values are left for validation to report
    if amount is None or not amount.is_finite() or abs(amount) > MAX_AMOUNT:
        return amount
    return round_to_cent(amount)


class CreatePurchaseCommandSanitizer:
    def sanitize(
        self, command: CreatePurchaseCommand,
    ) -> tuple[CreatePurchaseCommand, dict[str, list[str]]]:
        sanitized = dataclasses.replace(
            command,
            description=(command.description or "").strip(),
            amount=_round_amount(command.amount),
        )
        errors = validate_purchase(
            sanitized.description, sanitized.transaction_date, sanitized.amount,
        )
        return sanitized, errors
