"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - PurchaseId wraps UUID: never use bare UUID in domain logic
    - Monetary values are Decimal, never float
    - Currency codes compared uppercase

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (log extras, API payloads)
"""

from decimal import Decimal
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

PurchaseId = NewType("PurchaseId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

REFERENCE_CURRENCY = "USD"
CENT = Decimal("0.01")
MAX_DESCRIPTION_LENGTH = 50
# Largest value NUMERIC(18, 2) holds
MAX_AMOUNT = Decimal("9999999999999999.99")
RATE_MAX_AGE_MONTHS = 6


# ─── Enums ───────────────────────────────────────────────────────

class RequestCategory(str, Enum):
    """Request kinds as reported by the logging behavior."""
    COMMAND = "Command"
    QUERY = "Query"
    REQUEST = "Request"


def normalize_currency(code: str) -> str:
    """Trim and uppercase a currency code."""
    return code.strip().upper()
