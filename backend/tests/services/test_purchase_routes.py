"""Purchase Routes: verifies the HTTP surface end to end.

Invariants:
    - POST /purchases returns 201 with Location and the stored fields
    - GET /purchases/{id}?currency= converts with the stubbed rate
    - Error envelopes: 400 validation/conversion, 404 unknown id
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

_COFFEE = {
    "description": "Coffee beans",
    "transaction_date": "2024-06-15",
    "amount": "25.50",
}


async def test_create_purchase(client):
    res = await client.post("/purchases", json=_COFFEE)

    assert res.status_code == 201
    body = res.json()
    assert body["description"] == "Coffee beans"
    assert body["transaction_date"] == "2024-06-15"
    assert Decimal(body["amount_usd"]) == Decimal("25.50")
    assert body["id"]
    assert res.headers["location"] == f"/purchases/{body['id']}"


async def test_get_converted_purchase(client, eur_rates):
    created = (await client.post("/purchases", json=_COFFEE)).json()

    res = await client.get(f"/purchases/{created['id']}", params={"currency": "eur"})

    assert res.status_code == 200
    body = res.json()
    assert body["id"] == created["id"]
    assert body["currency"] == "EUR"
    assert body["exchange_rate_date"] == "2024-05-09"
    assert Decimal(body["exchange_rate"]) == Decimal("2.0")
    assert Decimal(body["converted_amount"]) == Decimal("51.00")
    assert eur_rates.calls == [("EUR", date(2024, 6, 15))]


async def test_description_too_long(client):
    res = await client.post("/purchases", json={**_COFFEE, "description": "x" * 51})

    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["errors"]["description"] == ["Description must not exceed 50 characters."]


async def test_missing_fields_reported_per_field(client):
    res = await client.post("/purchases", json={})

    assert res.status_code == 400
    errors = res.json()["error"]["errors"]
    assert set(errors) == {"description", "transaction_date", "amount"}


async def test_malformed_amount_is_a_400(client):
    res = await client.post("/purchases", json={**_COFFEE, "amount": "lots"})

    assert res.status_code == 400
    assert "amount" in res.json()["error"]["errors"]


async def test_unknown_purchase_is_404(client):
    res = await client.get(f"/purchases/{uuid4()}", params={"currency": "EUR"})

    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_missing_currency_is_400(client):
    created = (await client.post("/purchases", json=_COFFEE)).json()

    res = await client.get(f"/purchases/{created['id']}")

    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "CURRENCY_CONVERSION_FAILED"
    assert error["message"] == "Currency query parameter is required."


async def test_unknown_currency_is_400(client):
    created = (await client.post("/purchases", json=_COFFEE)).json()

    res = await client.get(f"/purchases/{created['id']}", params={"currency": "XYZ"})

    assert res.status_code == 400
    assert res.json()["error"]["message"] == (
        "No exchange rate found for XYZ on or before 2024-06-15."
    )


async def test_health_endpoints(client):
    assert (await client.get("/api/v1/health/")).status_code == 200
    ready = await client.get("/api/v1/health/ready")
    assert ready.status_code == 200
    assert ready.json()["checks"]["database"] == "healthy"


async def test_huge_amount_is_a_400(client):
    res = await client.post(
        "/purchases", json={**_COFFEE, "amount": "1000000000000000000000000000.00"},
    )

    assert res.status_code == 400
    assert res.json()["error"]["errors"]["amount"] == [
        "Amount must not exceed 9999999999999999.99.",
    ]
