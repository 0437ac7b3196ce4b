"""Purchase Events: notification published after a purchase is recorded.

Invariants:
    - PurchaseCreated carries the stored values (trimmed, rounded), not the raw input
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from purchase_service.core.domain_types import PurchaseId
from purchase_service.core.purchase import Purchase
from purchase_service.services.purchase_requests import CreatePurchaseCommand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurchaseCreated:
    purchase_id: PurchaseId
    description: str
    transaction_date: date
    amount: Decimal


def purchase_created_from(
    command: CreatePurchaseCommand, purchase: Purchase,
) -> PurchaseCreated:
    return PurchaseCreated(
        purchase_id=purchase.id,
        description=purchase.description,
        transaction_date=purchase.transaction_date,
        amount=purchase.amount_usd,
    )


class PurchaseCreatedHandler:
    """Records the event in the service log."""

    async def handle(self, event: PurchaseCreated) -> None:
        logger.info(
            f"Purchase created: {event.description} "
            f"({event.amount} USD on {event.transaction_date.isoformat()})",
            extra={
                "purchase_id": str(event.purchase_id),
                "event_type": type(event).__name__,
            },
        )
