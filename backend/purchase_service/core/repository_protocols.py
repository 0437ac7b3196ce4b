"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via the composition root

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Async in Protocol: boundary methods are async because implementations do IO
"""

from datetime import date
from typing import Protocol

from purchase_service.core.domain_types import PurchaseId
from purchase_service.core.purchase import ExchangeRateDetails, Purchase


class PurchaseRepository(Protocol):
    """Contract for purchase persistence: implemented by shell."""
    async def create(self, purchase: Purchase) -> None: ...
    async def get_by_id(self, purchase_id: PurchaseId) -> Purchase | None: ...


class RateSource(Protocol):
    """Contract for point-in-time exchange rate lookups.

    Returns the most recent rate effective on or before `on_or_before`,
    or None when the provider has no such rate.
    """
    async def lookup_rate(
        self, currency_code: str, on_or_before: date,
    ) -> ExchangeRateDetails | None: ...
