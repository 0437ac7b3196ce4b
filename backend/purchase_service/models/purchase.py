"""Purchase ORM: row shape of the `purchases` table.

Invariants:
    - id is a UUID primary key generated by the application (not the database)
    - amount_usd is NUMERIC(18, 2): stored exactly to the cent
    - description never longer than 50 characters
    - transaction_date indexed for date-range reporting

Design Decisions:
    - ORM record kept separate from core.purchase.Purchase: core stays free of
      SQLAlchemy, mapping lives in infrastructure/purchase_repository.py
"""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import Date, DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from purchase_service.core.domain_types import MAX_DESCRIPTION_LENGTH
from purchase_service.db.base import Base


class PurchaseRecord(Base):
    """A recorded purchase in the reference currency."""
    __tablename__ = "purchases"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    description: Mapped[str] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH), nullable=False,
    )
    transaction_date: Mapped[date] = mapped_column(
        Date, nullable=False, index=True,
    )
    amount_usd: Mapped[Decimal] = mapped_column(
        Numeric(18, 2, asdecimal=True), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
