"""Service test fixtures: async DB, repository and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_mediator dependency overridden with a mediator wired to the test DB
      and a fake rate source (no Treasury calls)
    - db_manager patched so the readiness probe sees the test DB

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - StaticPool: every session shares the single in-memory connection
"""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from purchase_service.api.deps import get_mediator
from purchase_service.core.purchase import ExchangeRateDetails
from purchase_service.db.base import Base
from purchase_service.infrastructure.database import DatabaseSessionManager
from purchase_service.infrastructure.purchase_repository import (
    SqlAlchemyPurchaseRepository,
)
import purchase_service.infrastructure.database as db_module
import purchase_service.models  # noqa: F401
from purchase_service.main import app
from purchase_service.services.pipeline import build_mediator


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_db_manager(test_engine):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    return manager


@pytest.fixture
async def repository(test_db_manager):
    return SqlAlchemyPurchaseRepository(test_db_manager)


@pytest.fixture
def eur_rates(make_rate_source):
    """Rate source answering EUR at 2.0, effective 2024-05-09."""
    return make_rate_source({
        "EUR": ExchangeRateDetails("EUR", date(2024, 5, 9), Decimal("2.0")),
    })


@pytest.fixture
async def client(repository, eur_rates, test_db_manager):
    """FastAPI test client with the mediator dependency overridden."""
    mediator = build_mediator(repository, eur_rates, cache_ttl_seconds=300)
    app.dependency_overrides[get_mediator] = lambda: mediator

    original_manager = db_module.db_manager
    db_module.db_manager = test_db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
