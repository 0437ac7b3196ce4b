"""Purchase Entities: immutable records for purchases, rates and conversions.

Invariants:
    - Purchase.amount_usd is stored already rounded to the cent
    - Purchase.created_at is timezone-aware UTC
    - ExchangeRateDetails.currency is uppercase; rate is positive
    - ConversionResult is derived, never persisted

Design Decisions:
    - Frozen dataclasses: created once, never mutated (no ORM coupling in core)
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from purchase_service.core.domain_types import PurchaseId


@dataclass(frozen=True)
class Purchase:
    """A single purchase recorded in the reference currency."""

    id: PurchaseId
    description: str
    transaction_date: date
    amount_usd: Decimal
    created_at: datetime


@dataclass(frozen=True)
class ExchangeRateDetails:
    """Rate published for `currency`, effective on `effective_date`.

    Convention: reference-currency amount × rate = target-currency amount.
    """

    currency: str
    effective_date: date
    rate: Decimal

    def __post_init__(self):
        if self.rate <= 0:
            raise ValueError(f"rate must be positive, got {self.rate}")


@dataclass(frozen=True)
class ConversionResult:
    """A purchase reported in a target currency."""

    id: PurchaseId
    description: str
    transaction_date: date
    amount_usd: Decimal
    currency: str
    exchange_rate: Decimal
    exchange_rate_date: date
    converted_amount: Decimal

    @classmethod
    def from_purchase(
        cls,
        purchase: Purchase,
        currency: str,
        rate: ExchangeRateDetails,
        converted_amount: Decimal,
    ) -> "ConversionResult":
        return cls(
            id=purchase.id,
            description=purchase.description,
            transaction_date=purchase.transaction_date,
            amount_usd=purchase.amount_usd,
            currency=currency,
            exchange_rate=rate.rate,
            exchange_rate_date=rate.effective_date,
            converted_amount=converted_amount,
        )
