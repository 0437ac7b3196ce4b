"""Rate Window: staleness policy for exchange rates.

Invariants:
    - A rate is usable iff transaction_date - 6 months <= effective_date <= transaction_date
    - Both bounds inclusive; month arithmetic clamps to month end (Aug 31 - 6m = Feb 28/29)
"""

from datetime import date

from dateutil.relativedelta import relativedelta

from purchase_service.core.domain_types import RATE_MAX_AGE_MONTHS


def earliest_usable_rate_date(transaction_date: date) -> date:
    return transaction_date - relativedelta(months=RATE_MAX_AGE_MONTHS)


def is_within_rate_window(transaction_date: date, effective_date: date) -> bool:
    return earliest_usable_rate_date(transaction_date) <= effective_date <= transaction_date
