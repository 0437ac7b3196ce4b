"""Treasury Rates Client: point-in-time exchange rate lookups against fiscaldata.treasury.gov.

Invariants:
    - One GET per lookup: filtered by currency and record_date <= date,
      sorted by record_date descending, limited to one record
    - 404 or an empty data array → None (no rate), never an error
    - Any other non-2xx, unreadable payload or transport failure → RateSourceUnavailable
    - No retries: retry policy belongs to callers

Design Decisions:
    - Shared httpx.AsyncClient injected (timeout and User-Agent set once in
      create_treasury_http_client): one connection pool per process
    - Full endpoint URL passed per request: httpx base_url would append a trailing slash
    - Upstream status/body kept in RateSourceUnavailable.upstream_detail and logs,
      never in the user-facing message
    - CancelledError (BaseException) passes through uncaught
"""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation

import httpx

from purchase_service.config import TREASURY_RATES_URL, Settings
from purchase_service.core.domain_types import normalize_currency
from purchase_service.core.errors import RateSourceUnavailable
from purchase_service.core.purchase import ExchangeRateDetails

logger = logging.getLogger(__name__)

_FIELDS = "record_date,currency,exchange_rate"
_MAX_LOGGED_BODY = 500


def create_treasury_http_client(settings: Settings) -> httpx.AsyncClient:
    """HTTP client preconfigured for the Treasury rates endpoint."""
    return httpx.AsyncClient(
        timeout=settings.treasury_rates_timeout_seconds,
        headers={"User-Agent": settings.treasury_rates_user_agent},
    )


def build_rate_query(currency_code: str, on_or_before: date) -> dict[str, str]:
    return {
        "fields": _FIELDS,
        "filter": (
            f"currency:eq:{currency_code},"
            f"record_date:lte:{on_or_before.isoformat()}"
        ),
        "sort": "-record_date",
        "limit": "1",
    }


class TreasuryRatesClient:
    """Looks up the most recent published rate on or before a date."""

    def __init__(
        self, http_client: httpx.AsyncClient, base_url: str = TREASURY_RATES_URL,
    ):
        self._http = http_client
        self._url = base_url

    async def lookup_rate(
        self, currency_code: str, on_or_before: date,
    ) -> ExchangeRateDetails | None:
        params = build_rate_query(currency_code, on_or_before)
        try:
            response = await self._http.get(self._url, params=params)
        except httpx.TimeoutException as e:
            logger.warning(
                f"Treasury API timed out for {currency_code} on {on_or_before}",
                extra={"currency": currency_code},
            )
            raise RateSourceUnavailable(
                "Exchange rate provider did not respond in time.", str(e),
            )
        except httpx.TransportError as e:
            logger.warning(
                f"Treasury API unreachable: {e}", extra={"currency": currency_code},
            )
            raise RateSourceUnavailable(
                "Exchange rate provider is unavailable.", str(e),
            )

        if response.status_code == httpx.codes.NOT_FOUND:
            return None

        if not response.is_success:
            body = response.text[:_MAX_LOGGED_BODY]
            logger.warning(
                f"Treasury API returned {response.status_code}: {body}",
                extra={"currency": currency_code},
            )
            raise RateSourceUnavailable(
                "Failed to retrieve exchange rate from Treasury API.",
                f"HTTP {response.status_code}",
            )

        records = self._read_records(response)
        if not records:
            return None
        return self._read_rate(records[0], currency_code)

    @staticmethod
    def _read_records(response: httpx.Response) -> list:
        try:
            payload = response.json()
        except ValueError:
            logger.warning(
                f"Non-JSON payload from Treasury API: {response.text[:_MAX_LOGGED_BODY]}",
            )
            raise RateSourceUnavailable(
                "Treasury API returned an unexpected response.", "invalid JSON",
            )

        # Fiscal data wraps records in {"data": [...]}; a bare array is accepted too
        records = payload.get("data") if isinstance(payload, dict) else payload
        if not isinstance(records, list):
            logger.warning(f"Unexpected payload from Treasury API: {payload!r:.500}")
            raise RateSourceUnavailable(
                "Treasury API returned an unexpected response.", "missing data array",
            )
        return records

    @staticmethod
    def _read_rate(record: object, currency_code: str) -> ExchangeRateDetails:
        if not isinstance(record, dict):
            raise RateSourceUnavailable(
                "Treasury API returned an unreadable exchange rate.", "record is not an object",
            )

        raw_date = record.get("record_date")
        try:
            effective_date = date.fromisoformat(raw_date)
        except (TypeError, ValueError):
            logger.warning(f"Unable to read record_date from Treasury payload: {record}")
            raise RateSourceUnavailable(
                "Treasury API returned an unreadable exchange rate.",
                f"record_date={raw_date!r}",
            )

        raw_rate = record.get("exchange_rate")
        try:
            if raw_rate is None or isinstance(raw_rate, bool):
                raise InvalidOperation
            rate = Decimal(str(raw_rate).strip())
            if not rate.is_finite() or rate <= 0:
                raise InvalidOperation
        except InvalidOperation:
            logger.warning(f"Unable to read exchange_rate from Treasury payload: {record}")
            raise RateSourceUnavailable(
                "Treasury API returned an unreadable exchange rate.",
                f"exchange_rate={raw_rate!r}",
            )

        return ExchangeRateDetails(
            currency=normalize_currency(currency_code),
            effective_date=effective_date,
            rate=rate,
        )
