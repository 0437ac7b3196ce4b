"""Treasury Rates Client: verifies query shape and response handling.

Invariants:
    - One GET per lookup with the filter/sort/limit query
    - 404 and empty data → None
    - Other failures → RateSourceUnavailable
"""

import json
from datetime import date
from decimal import Decimal

import httpx
import pytest

from purchase_service.config import Settings
from purchase_service.core.errors import RateSourceUnavailable
from purchase_service.infrastructure.treasury_rates_client import (
    TreasuryRatesClient, build_rate_query, create_treasury_http_client,
)

_BASE = "https://rates.test/rates_of_exchange"


def _client(handler):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TreasuryRatesClient(http, _BASE)


def _json(payload, status=200):
    def handler(request):
        return httpx.Response(status, content=json.dumps(payload))
    return handler


def test_build_rate_query():
    assert build_rate_query("EUR", date(2024, 6, 15)) == {
        "fields": "record_date,currency,exchange_rate",
        "filter": "currency:eq:EUR,record_date:lte:2024-06-15",
        "sort": "-record_date",
        "limit": "1",
    }


async def test_sends_filtered_query():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"data": [
            {"record_date": "2024-03-31", "currency": "Euro Zone-Euro", "exchange_rate": "0.926"},
        ]})

    rate = await _client(handler).lookup_rate("eur", date(2024, 6, 15))

    assert len(seen) == 1
    assert str(seen[0].url).split("?")[0] == _BASE
    params = seen[0].url.params
    assert params["filter"] == "currency:eq:eur,record_date:lte:2024-06-15"
    assert params["sort"] == "-record_date"
    assert params["limit"] == "1"
    assert rate.currency == "EUR"
    assert rate.effective_date == date(2024, 3, 31)
    assert rate.rate == Decimal("0.926")


async def test_numeric_rate_accepted():
    rate = await _client(_json({"data": [
        {"record_date": "2024-03-31", "exchange_rate": 1.5},
    ]})).lookup_rate("CAD", date(2024, 6, 15))
    assert rate.rate == Decimal("1.5")


async def test_empty_data_is_none():
    assert await _client(_json({"data": []})).lookup_rate("EUR", date(2024, 6, 15)) is None


async def test_not_found_is_none():
    assert await _client(_json({}, status=404)).lookup_rate("EUR", date(2024, 6, 15)) is None


async def test_server_error_raises():
    with pytest.raises(RateSourceUnavailable) as exc_info:
        await _client(_json({"error": "x"}, status=500)).lookup_rate("EUR", date(2024, 6, 15))
    assert exc_info.value.upstream_detail == "HTTP 500"
    assert exc_info.value.message == "Failed to retrieve exchange rate from Treasury API."


async def test_invalid_json_raises():
    def handler(request):
        return httpx.Response(200, content=b"<html>")

    with pytest.raises(RateSourceUnavailable):
        await _client(handler).lookup_rate("EUR", date(2024, 6, 15))


async def test_missing_data_array_raises():
    with pytest.raises(RateSourceUnavailable):
        await _client(_json({"meta": {}})).lookup_rate("EUR", date(2024, 6, 15))


@pytest.mark.parametrize("record", [
    {"exchange_rate": "1.0"},
    {"record_date": "2024-13-01", "exchange_rate": "1.0"},
    {"record_date": "2024-03-31"},
    {"record_date": "2024-03-31", "exchange_rate": "abc"},
    {"record_date": "2024-03-31", "exchange_rate": "0"},
])
async def test_unreadable_record_raises(record):
    with pytest.raises(RateSourceUnavailable):
        await _client(_json({"data": [record]})).lookup_rate("EUR", date(2024, 6, 15))


async def test_timeout_raises():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(RateSourceUnavailable) as exc_info:
        await _client(handler).lookup_rate("EUR", date(2024, 6, 15))
    assert "timed out" not in exc_info.value.message


async def test_connection_error_raises():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(RateSourceUnavailable):
        await _client(handler).lookup_rate("EUR", date(2024, 6, 15))


async def test_http_client_uses_settings():
    settings = Settings(
        _env_file=None,
        treasury_rates_user_agent="purchase-service-test/1.0",
    )
    http = create_treasury_http_client(settings)
    try:
        assert http.timeout.read == 10
        assert http.headers["User-Agent"] == "purchase-service-test/1.0"
    finally:
        await http.aclose()
