"""Purchase Handlers: create and get-converted use cases.

Invariants:
    - CreatePurchaseHandler validates again (commands may bypass sanitization
      when registered with a custom behavior list)
    - Purchases get a fresh UUID4 and created_at in UTC
    - GetPurchaseHandler rejects a blank currency before any IO
    - A missing purchase answers None; the HTTP layer maps it to 404
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from purchase_service.core.domain_types import PurchaseId
from purchase_service.core.errors import (
    CurrencyConversionError, ErrorContext, RequestValidationError,
)
from purchase_service.core.money import round_to_cent
from purchase_service.core.purchase import ConversionResult, Purchase
from purchase_service.core.repository_protocols import PurchaseRepository
from purchase_service.core.validate_purchase import validate_purchase
from purchase_service.services.currency_conversion import CurrencyConversionService
from purchase_service.services.purchase_requests import (
    CreatePurchaseCommand, GetPurchaseQuery,
)

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CreatePurchaseHandler:
    def __init__(
        self,
        repository: PurchaseRepository,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._repository = repository
        self._clock = clock

    async def handle(self, command: CreatePurchaseCommand) -> Purchase:
        errors = validate_purchase(
            command.description, command.transaction_date, command.amount,
        )
        if errors:
            raise RequestValidationError(
                errors, ErrorContext(request_name=type(command).__name__),
            )

        purchase = Purchase(
            id=PurchaseId(uuid.uuid4()),
            description=command.description.strip(),
            transaction_date=command.transaction_date,
            amount_usd=round_to_cent(command.amount),
            created_at=self._clock(),
        )
        await self._repository.create(purchase)
        logger.info(
            f"Purchase {purchase.id} recorded",
            extra={"purchase_id": str(purchase.id)},
        )
        return purchase


class GetPurchaseHandler:
    def __init__(
        self,
        repository: PurchaseRepository,
        conversion: CurrencyConversionService,
    ):
        self._repository = repository
        self._conversion = conversion

    async def handle(self, query: GetPurchaseQuery) -> ConversionResult | None:
        if query.currency is None or not query.currency.strip():
            raise CurrencyConversionError("Currency query parameter is required.")

        purchase = await self._repository.get_by_id(query.purchase_id)
        if purchase is None:
            return None
        return await self._conversion.convert(purchase, query.currency)
