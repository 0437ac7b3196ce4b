"""Currency Conversion: converts a purchase with a historical rate.

Invariants:
    - The rate used is the latest one on or before the transaction date
    - That rate must be at most 6 calendar months older than the transaction date
    - converted_amount = amount_usd × rate, rounded half-away-from-zero to the cent
    - Every failure surfaces as CurrencyConversionError (RateSourceUnavailable included)
"""

import logging
from decimal import InvalidOperation

from purchase_service.core.domain_types import normalize_currency
from purchase_service.core.errors import CurrencyConversionError, ErrorContext
from purchase_service.core.money import round_to_cent
from purchase_service.core.purchase import ConversionResult, Purchase
from purchase_service.core.rate_window import is_within_rate_window
from purchase_service.core.repository_protocols import RateSource

logger = logging.getLogger(__name__)


class CurrencyConversionService:
    """Staleness policy and rounding on top of a raw rate lookup."""

    def __init__(self, rate_source: RateSource):
        self._rates = rate_source

    async def convert(
        self, purchase: Purchase, target_currency: str,
    ) -> ConversionResult:
        if target_currency is None or not target_currency.strip():
            raise CurrencyConversionError("Target currency is required.")

        currency = normalize_currency(target_currency)
        ctx = ErrorContext(purchase_id=str(purchase.id))
        transaction_date = purchase.transaction_date

        rate = await self._rates.lookup_rate(currency, transaction_date)
        if rate is None:
            logger.info(
                f"No {currency} rate on or before {transaction_date}",
                extra={"purchase_id": str(purchase.id), "currency": currency},
            )
            raise CurrencyConversionError(
                f"No exchange rate found for {currency} on or before "
                f"{transaction_date.isoformat()}.",
                ctx,
            )

        if not is_within_rate_window(transaction_date, rate.effective_date):
            logger.info(
                f"{currency} rate dated {rate.effective_date} outside window "
                f"for {transaction_date}",
                extra={"purchase_id": str(purchase.id), "currency": currency},
            )
            raise CurrencyConversionError(
                f"No exchange rate within six months prior to "
                f"{transaction_date.isoformat()} for {currency}.",
                ctx,
            )

        try:
            converted = round_to_cent(purchase.amount_usd * rate.rate)
        except InvalidOperation:
            logger.warning(
                f"Converted amount out of range: {purchase.amount_usd} USD × {rate.rate}",
                extra={"purchase_id": str(purchase.id), "currency": currency},
            )
            raise CurrencyConversionError(
                f"Converted amount in {currency} is too large to represent.", ctx,
            )
        return ConversionResult.from_purchase(purchase, currency, rate, converted)
