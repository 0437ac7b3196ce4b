"""ORM Models: SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is complete once the package is imported
"""

from purchase_service.models.purchase import PurchaseRecord  # noqa: F401
