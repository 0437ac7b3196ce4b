"""Pipeline Wiring: verifies the composed mediator end to end without HTTP."""

import logging
from datetime import date
from decimal import Decimal

import pytest

from purchase_service.core.errors import RequestValidationError
from purchase_service.core.purchase import ExchangeRateDetails
from purchase_service.services.pipeline import build_event_dispatcher, build_mediator
from purchase_service.services.purchase_events import PurchaseCreated
from purchase_service.services.purchase_requests import (
    CreatePurchaseCommand, GetPurchaseQuery,
)


class Collect:
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


async def test_create_publishes_purchase_created(memory_repository, make_rate_source):
    dispatcher = build_event_dispatcher()
    listener = Collect()
    dispatcher.subscribe(PurchaseCreated, listener)
    mediator = build_mediator(memory_repository, make_rate_source(), dispatcher=dispatcher)

    purchase = await mediator.send(CreatePurchaseCommand(
        "  Coffee beans ", date(2024, 6, 15), Decimal("25.504"),
    ))

    assert purchase.amount_usd == Decimal("25.50")
    assert listener.events == [PurchaseCreated(
        purchase_id=purchase.id,
        description="Coffee beans",
        transaction_date=date(2024, 6, 15),
        amount=Decimal("25.50"),
    )]


async def test_invalid_command_never_reaches_repository(memory_repository, make_rate_source):
    mediator = build_mediator(memory_repository, make_rate_source())

    with pytest.raises(RequestValidationError) as exc_info:
        await mediator.send(CreatePurchaseCommand("x" * 51, date(2024, 6, 15), Decimal("1")))

    assert "description" in exc_info.value.errors
    assert memory_repository.purchases == {}


async def test_repeated_queries_hit_rate_source_once(memory_repository, make_rate_source):
    rates = make_rate_source({
        "EUR": ExchangeRateDetails("EUR", date(2024, 5, 9), Decimal("2.0")),
    })
    mediator = build_mediator(memory_repository, rates, cache_ttl_seconds=300)
    purchase = await mediator.send(
        CreatePurchaseCommand("Tea", date(2024, 6, 15), Decimal("1.00")),
    )

    for _ in range(2):
        result = await mediator.send(GetPurchaseQuery(purchase.id, "EUR"))
        assert result.converted_amount == Decimal("2.00")

    assert len(rates.calls) == 1


async def test_purchase_created_is_logged(memory_repository, make_rate_source, caplog):
    caplog.set_level(logging.INFO, logger="purchase_service.services.purchase_events")
    mediator = build_mediator(memory_repository, make_rate_source())

    purchase = await mediator.send(
        CreatePurchaseCommand("Tea", date(2024, 6, 15), Decimal("1.00")),
    )

    record = caplog.records[-1]
    assert record.getMessage().startswith("Purchase created: Tea")
    assert record.purchase_id == str(purchase.id)
