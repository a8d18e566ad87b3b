"""Normalize a user's period records into chronological order.

Every period-derived statistic reads from this ordering.  The storage layer
may return rows newest-first (for listing) or in arbitrary order; the engine
never relies on that and always sorts here.
"""

from __future__ import annotations

import logging
from typing import Iterable

from lunara.analytics.cycle.dates import chronological_key, whole_days
from lunara.analytics.errors import RecordValidationError
from lunara.analytics.records import PeriodRecord

logger = logging.getLogger("lunara.analytics.cycle.period_history")


def sort_period_history(records: Iterable[PeriodRecord]) -> list[PeriodRecord]:
    """Return ``records`` sorted ascending by start date.

    Ties keep their input order (``sorted`` is stable).  The input is not
    modified.

    Raises:
        RecordValidationError: If a record has no start date, or its end date
            falls before its start date.
    """
    history = list(records)
    for index, record in enumerate(history):
        if record.start_date is None:
            raise RecordValidationError(
                f"Period record at position {index} is missing its start date"
            )
        if record.end_date is not None and whole_days(record.start_date, record.end_date) < 0:
            raise RecordValidationError(
                f"Period record at position {index} ends ({record.end_date}) "
                f"before it starts ({record.start_date})"
            )

    ordered = sorted(history, key=lambda r: chronological_key(r.start_date))
    logger.debug("Sorted %d period record(s)", len(ordered))
    return ordered
