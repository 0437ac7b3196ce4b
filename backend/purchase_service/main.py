"""Purchase Service API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PurchaseServiceError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, Treasury HTTP client and mediator created once in the lifespan
      and released on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Mediator kept on app.state and resolved through api.deps.get_mediator,
      so tests swap it with dependency_overrides
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from purchase_service.api.error_handlers import register_error_handlers
from purchase_service.api.routes import health, purchases
from purchase_service.config import get_settings
from purchase_service.infrastructure.database import close_db, init_db
from purchase_service.infrastructure.observability import setup_logging
from purchase_service.infrastructure.purchase_repository import (
    SqlAlchemyPurchaseRepository,
)
from purchase_service.infrastructure.treasury_rates_client import (
    TreasuryRatesClient, create_treasury_http_client,
)
from purchase_service.services.pipeline import build_mediator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.resolved_database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    http_client = create_treasury_http_client(settings)
    app.state.mediator = build_mediator(
        SqlAlchemyPurchaseRepository(db),
        TreasuryRatesClient(http_client, settings.treasury_rates_base_url),
        settings.treasury_rates_cache_ttl_seconds,
    )
    logger.info(f"Purchase service started ({settings.environment})")
    try:
        yield
    finally:
        logger.info("Purchase service shutting down")
        await http_client.aclose()
        await close_db()


app = FastAPI(
    title="Purchase Service API", version="1.0.0", lifespan=lifespan,
)

# CORS: configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(purchases.router)

register_error_handlers(app)
