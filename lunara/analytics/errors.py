"""Exceptions raised by the analytics engine."""

from __future__ import annotations


class AnalyticsError(Exception):
    """Base class for all analytics engine errors."""


class RecordValidationError(AnalyticsError, ValueError):
    """Raised when an input record is malformed or missing a required field.

    The whole input is rejected; no partial result is produced.
    """


class NotEnoughDataError(AnalyticsError):
    """Raised when there are too few period records to derive cycle statistics.

    This is an expected condition (a new user with a single entry), not a
    failure of the system.  Callers map it to a user-facing hint such as
    "add another period entry to see statistics".
    """

    def __init__(self, record_count: int, required: int = 2) -> None:
        self.record_count = record_count
        self.required = required
        super().__init__(
            f"Not enough period data to calculate stats: "
            f"{record_count} record(s), need at least {required}"
        )
