"""Purchase Repository: SQLAlchemy implementation of the PurchaseRepository protocol.

Invariants:
    - One session per operation; no state kept between calls
    - Returned purchases carry timezone-aware UTC created_at, whatever the driver returns

Design Decisions:
    - Takes the session manager, not a request-scoped session: handlers are built
      once at startup and shared by every request
"""

from datetime import datetime, timezone

from purchase_service.core.domain_types import PurchaseId
from purchase_service.core.purchase import Purchase
from purchase_service.infrastructure.database import DatabaseSessionManager
from purchase_service.models.purchase import PurchaseRecord


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_domain(record: PurchaseRecord) -> Purchase:
    return Purchase(
        id=PurchaseId(record.id),
        description=record.description,
        transaction_date=record.transaction_date,
        amount_usd=record.amount_usd,
        created_at=_as_utc(record.created_at),
    )


def to_record(purchase: Purchase) -> PurchaseRecord:
    return PurchaseRecord(
        id=purchase.id,
        description=purchase.description,
        transaction_date=purchase.transaction_date,
        amount_usd=purchase.amount_usd,
        created_at=purchase.created_at,
    )


class SqlAlchemyPurchaseRepository:
    """Stores purchases in the `purchases` table."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def create(self, purchase: Purchase) -> None:
        async with self._db.session() as session:
            session.add(to_record(purchase))
            await session.commit()

    async def get_by_id(self, purchase_id: PurchaseId) -> Purchase | None:
        async with self._db.session() as session:
            record = await session.get(PurchaseRecord, purchase_id)
            return to_domain(record) if record else None
