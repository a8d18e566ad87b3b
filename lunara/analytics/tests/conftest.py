"""Shared fixtures for analytics engine tests."""

from __future__ import annotations

from datetime import date
from uuid import UUID

import pytest

from lunara.analytics.config_loader import AnalyticsConfig, load_analytics_config
from lunara.analytics.records import PeriodRecord

TEST_USER_ID = UUID("12345678-1234-5678-1234-567812345678")


@pytest.fixture
def analytics_config() -> AnalyticsConfig:
    """Load the bundled analytics config for tests."""
    return load_analytics_config()


@pytest.fixture
def regular_periods() -> list[PeriodRecord]:
    """Three periods exactly 28 days apart; the last spans leap day (6 days)."""
    return [
        PeriodRecord(start_date=date(2024, 1, 1), end_date=date(2024, 1, 5), user_id=TEST_USER_ID),
        PeriodRecord(start_date=date(2024, 1, 29), end_date=date(2024, 2, 2), user_id=TEST_USER_ID),
        PeriodRecord(start_date=date(2024, 2, 26), end_date=date(2024, 3, 2), user_id=TEST_USER_ID),
    ]
