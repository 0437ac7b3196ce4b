"""Cached Rate Source: TTL memoization in front of any RateSource.

Invariants:
    - Key is (trimmed uppercase currency, requested date)
    - Found and confirmed-absent (None) outcomes are both cached for the same TTL
    - Exceptions from the wrapped source are never cached
    - ttl_seconds <= 0 disables caching: every lookup reaches the wrapped source
    - Expired entries are evicted on access, and every write sweeps all expired keys
      so dates never asked for again do not accumulate

Design Decisions:
    - Instance-owned dict, no module singleton: the composition root decides scope
    - No locks: all reads and writes happen between awaits on a single event loop;
      concurrent misses for one key may each hit the wrapped source (last write wins)
    - Injectable clock (time.monotonic by default): expiry is testable without sleeping
"""

import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import Callable

from purchase_service.core.domain_types import normalize_currency
from purchase_service.core.purchase import ExchangeRateDetails
from purchase_service.core.repository_protocols import RateSource

logger = logging.getLogger(__name__)

CacheKey = tuple[str, date]


@dataclass(frozen=True)
class _CacheEntry:
    rate: ExchangeRateDetails | None
    expires_at: float


class CachedRateSource:
    """Wraps a RateSource and remembers its answers for ttl_seconds."""

    def __init__(
        self,
        inner: RateSource,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._inner = inner
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[CacheKey, _CacheEntry] = {}

    @property
    def enabled(self) -> bool:
        return self._ttl > 0

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    async def lookup_rate(
        self, currency_code: str, on_or_before: date,
    ) -> ExchangeRateDetails | None:
        if not self.enabled:
            return await self._inner.lookup_rate(currency_code, on_or_before)

        key = (normalize_currency(currency_code), on_or_before)
        entry = self._entries.get(key)
        if entry is not None:
            if self._clock() < entry.expires_at:
                logger.debug(
                    f"Rate cache hit for {key[0]} on {on_or_before}",
                    extra={"currency": key[0]},
                )
                return entry.rate
            del self._entries[key]

        rate = await self._inner.lookup_rate(currency_code, on_or_before)
        now = self._clock()
        self._evict_expired(now)
        self._entries[key] = _CacheEntry(rate, now + self._ttl)
        return rate

    def _evict_expired(self, now: float) -> None:
        expired = [k for k, e in self._entries.items() if e.expires_at <= now]
        for k in expired:
            del self._entries[k]
