"""Purchase Schemas: bodies for creating purchases and reading them converted.

Design Decisions:
    - Create fields optional at the schema level: missing values reach the
      sanitizer and get the same field messages as any other invalid input
    - from_attributes: responses validate straight from core dataclasses
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class PurchaseCreate(BaseModel):
    """Input for POST /purchases."""
    description: str | None = None
    transaction_date: date | None = None
    amount: Decimal | None = None


class PurchaseResponse(BaseModel):
    """A stored purchase."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    description: str
    transaction_date: date
    amount_usd: Decimal
    created_at: datetime


class ConvertedPurchaseResponse(BaseModel):
    """A stored purchase reported in a target currency."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    description: str
    transaction_date: date
    amount_usd: Decimal
    currency: str
    exchange_rate: Decimal
    exchange_rate_date: date
    converted_amount: Decimal
