"""Classify "today" within the user's cycle.

This is a fixed-offset approximation, NOT a fertility model: the ovulation
day is taken as the midpoint of the average cycle and the fertile window as
the few days ending on it.  It exists to give the dashboard a rough
orientation and must not be presented as medical guidance.
"""

from __future__ import annotations

import logging
from datetime import date

from lunara.analytics.config_loader import AnalyticsConfig, get_analytics_config
from lunara.analytics.cycle.dates import whole_days
from lunara.analytics.records import CurrentCycleStatus, CycleStatus

logger = logging.getLogger("lunara.analytics.cycle.day_classifier")


class CycleDayClassifier:
    """Place a date in the cycle as Period, Fertile or Regular.

    Usage::

        classifier = CycleDayClassifier()
        status = classifier.classify(
            today=date(2024, 3, 10),
            last_start=date(2024, 2, 26),
            avg_cycle_length=28,
            avg_period_length=5,
        )
        status.status        # CycleStatus.fertile
        status.day_in_cycle  # 14
    """

    def __init__(self, config: AnalyticsConfig | None = None) -> None:
        self._config = config or get_analytics_config()

    def ovulation_day(self, avg_cycle_length: int) -> int:
        return avg_cycle_length // self._config.fertile_window.ovulation_divisor

    def fertile_window(self, avg_cycle_length: int) -> tuple[int, int]:
        """Inclusive ``(first, last)`` cycle days of the fertile window."""
        ovulation = self.ovulation_day(avg_cycle_length)
        return ovulation - (self._config.fertile_window.window_days - 1), ovulation

    def classify(
        self,
        today: date,
        last_start: date,
        avg_cycle_length: int,
        avg_period_length: int,
    ) -> CurrentCycleStatus | None:
        """Classify ``today`` relative to the most recent period start.

        Args:
            today:             The date to classify.
            last_start:        Start date of the most recent period.
            avg_cycle_length:  Rounded average cycle length in days.
            avg_period_length: Rounded average period length in days (0 if
                               no period has an end date).

        Returns:
            The status, or None if there is no average cycle to project from
            or ``today`` is before ``last_start``.
        """
        if avg_cycle_length <= 0:
            return None

        days_since_start = whole_days(last_start, today)
        if days_since_start < 0:
            logger.debug("Date %s precedes last period start %s", today, last_start)
            return None

        messages = self._config.status_messages

        # The logged start day is a bleeding day even with no end dates on file
        period_days = max(avg_period_length, 1)
        if days_since_start < period_days:
            return CurrentCycleStatus(
                day_in_cycle=days_since_start + 1,
                status=CycleStatus.period,
                message=messages.period,
            )

        cycle_day = days_since_start % avg_cycle_length + 1
        first, last = self.fertile_window(avg_cycle_length)
        if first <= cycle_day <= last:
            return CurrentCycleStatus(
                day_in_cycle=cycle_day,
                status=CycleStatus.fertile,
                message=messages.fertile,
            )
        return CurrentCycleStatus(
            day_in_cycle=cycle_day,
            status=CycleStatus.regular,
            message=messages.regular,
        )
