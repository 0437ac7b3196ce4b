"""Root conftest: shared test configuration and fakes."""

import os
from datetime import date

import pytest

# Ensure tests never reach a real database or the Treasury API
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TREASURY_RATES_BASE_URL", "https://rates.invalid/rates_of_exchange")
os.environ.setdefault("LOG_FORMAT", "text")


class FakeRateSource:
    """RateSource returning canned rates (or raising) and recording every call."""

    def __init__(self, rates=None, error: Exception | None = None):
        self.rates = dict(rates or {})
        self.error = error
        self.calls: list[tuple[str, date]] = []

    async def lookup_rate(self, currency_code, on_or_before):
        self.calls.append((currency_code, on_or_before))
        if self.error is not None:
            raise self.error
        return self.rates.get(currency_code.strip().upper())


class InMemoryPurchaseRepository:
    def __init__(self):
        self.purchases = {}

    async def create(self, purchase):
        self.purchases[purchase.id] = purchase

    async def get_by_id(self, purchase_id):
        return self.purchases.get(purchase_id)


@pytest.fixture
def fake_rates():
    return FakeRateSource()


@pytest.fixture
def memory_repository():
    return InMemoryPurchaseRepository()


@pytest.fixture
def make_rate_source():
    return FakeRateSource
