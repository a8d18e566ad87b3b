"""Project the next period from the latest start date and the averages."""

from __future__ import annotations

from datetime import date, timedelta

from lunara.analytics.records import NextPeriodPrediction


def predict_next_period(
    last_start: date,
    avg_cycle_length: int,
    avg_period_length: int,
) -> NextPeriodPrediction | None:
    """Predict the next period's start and end.

    The start is ``avg_cycle_length`` days after ``last_start``; the end is
    ``avg_period_length - 1`` days after that.  Without any logged end dates
    (``avg_period_length == 0``) the predicted period is a single day.

    Returns:
        The prediction, or None when ``avg_cycle_length`` is 0.
    """
    if avg_cycle_length == 0:
        return None

    predicted_start = last_start + timedelta(days=avg_cycle_length)
    predicted_end = predicted_start + timedelta(days=max(avg_period_length - 1, 0))
    return NextPeriodPrediction(
        predicted_start_date=predicted_start,
        predicted_end_date=predicted_end,
    )
