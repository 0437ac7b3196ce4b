"""Purchase Requests: the command and query the HTTP layer sends through the mediator."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from purchase_service.core.domain_types import PurchaseId
from purchase_service.core.purchase import ConversionResult, Purchase
from purchase_service.mediator.types import Command, Query


@dataclass(frozen=True)
class CreatePurchaseCommand(Command[Purchase]):
    description: str
    transaction_date: date
    amount: Decimal


@dataclass(frozen=True)
class GetPurchaseQuery(Query[ConversionResult | None]):
    """Answered with None when no purchase has this id."""
    purchase_id: PurchaseId
    currency: str
