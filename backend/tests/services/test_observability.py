"""Structured Logging: verifies the JSON formatter handles domain values."""

import json
import logging
from datetime import date
from decimal import Decimal

from purchase_service.infrastructure.observability import JSONFormatter


def test_json_formatter_includes_extras():
    record = logging.LogRecord(
        "purchase_service.test", logging.INFO, __file__, 1, "Starting Command X", None, None,
    )
    record.request_name = "CreatePurchaseCommand"
    record.payload = {"amount": Decimal("25.50"), "transaction_date": date(2024, 6, 15)}

    log = json.loads(JSONFormatter().format(record))

    assert log["level"] == "INFO"
    assert log["message"] == "Starting Command X"
    assert log["request_name"] == "CreatePurchaseCommand"
    assert log["payload"] == {"amount": "25.50", "transaction_date": "2024-06-15"}
    assert "elapsed_ms" not in log
