"""Calendar-day arithmetic shared by the cycle components."""

from __future__ import annotations

from datetime import date, datetime, time


def whole_days(start: date, end: date) -> int:
    """Whole days from ``start`` to ``end``, rounded down.

    Two datetimes are compared exactly and the fractional day is dropped
    (``timedelta.days`` floors, so 23 hours is 0 and -1 hour is -1).  When
    either side is a plain date, both are compared as calendar dates.
    """
    if isinstance(start, datetime) and isinstance(end, datetime):
        return (end - start).days
    return (as_date(end) - as_date(start)).days


def as_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def chronological_key(value: date) -> tuple[date, time]:
    """Sort key that orders dates and datetimes together.

    A plain date sorts as midnight of that day.
    """
    if isinstance(value, datetime):
        return value.date(), value.time()
    return value, time.min
