"""Pipeline Wiring: composition root for the mediator.

Invariants:
    - Behavior order: sanitization → logging → side effect → handler
    - Built once per process (FastAPI lifespan); nothing is resolved per request
    - The rate cache is created here and owned by the conversion service

Design Decisions:
    - Explicit construction over a DI container: every dependency is visible in one place
    - Dispatcher injectable so tests can subscribe extra listeners
"""

from purchase_service.core.repository_protocols import PurchaseRepository, RateSource
from purchase_service.events.dispatcher import EventDispatcher
from purchase_service.mediator.behaviors import (
    CommandSanitizationBehavior, CommandSideEffectBehavior, RequestLoggingBehavior,
)
from purchase_service.mediator.mediator import Mediator, MediatorBuilder
from purchase_service.services.currency_conversion import CurrencyConversionService
from purchase_service.services.handle_purchases import (
    CreatePurchaseHandler, GetPurchaseHandler,
)
from purchase_service.services.purchase_events import (
    PurchaseCreated, PurchaseCreatedHandler, purchase_created_from,
)
from purchase_service.services.purchase_requests import (
    CreatePurchaseCommand, GetPurchaseQuery,
)
from purchase_service.services.rate_cache import CachedRateSource
from purchase_service.services.sanitize_purchases import CreatePurchaseCommandSanitizer


def build_event_dispatcher() -> EventDispatcher:
    dispatcher = EventDispatcher()
    dispatcher.subscribe(PurchaseCreated, PurchaseCreatedHandler())
    return dispatcher


def build_mediator(
    repository: PurchaseRepository,
    rate_source: RateSource,
    cache_ttl_seconds: float = 300,
    dispatcher: EventDispatcher | None = None,
) -> Mediator:
    """Wire cache, conversion, handlers and behaviors into a Mediator."""
    rates = CachedRateSource(rate_source, cache_ttl_seconds)
    conversion = CurrencyConversionService(rates)
    dispatcher = dispatcher or build_event_dispatcher()

    return (
        MediatorBuilder()
        .add_behavior(CommandSanitizationBehavior({
            CreatePurchaseCommand: CreatePurchaseCommandSanitizer(),
        }))
        .add_behavior(RequestLoggingBehavior())
        .add_behavior(CommandSideEffectBehavior(dispatcher, {
            CreatePurchaseCommand: purchase_created_from,
        }))
        .register(CreatePurchaseCommand, CreatePurchaseHandler(repository))
        .register(GetPurchaseQuery, GetPurchaseHandler(repository, conversion))
        .build()
    )
