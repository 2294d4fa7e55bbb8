from __future__ import annotations

from datetime import timedelta

import pandas as pd
import pytest

from tests.feed_builders import MT, make_row


@pytest.fixture
def reference_instant() -> pd.Timestamp:
    # Monday 2025-06-02, 14:30 MDT
    return pd.Timestamp("2025-06-02 14:30", tz=MT)


@pytest.fixture
def three_hour_rows() -> list[dict]:
    start = pd.Timestamp("2025-06-02 14:00", tz=MT)
    return [
        make_row(start, 100, 50, 10),
        make_row(start + timedelta(hours=1), 100, 0, 10),
        make_row(start + timedelta(hours=2), 100, 0, 60),
    ]


@pytest.fixture
def week_rows() -> list[dict]:
    """Eight days of hourly rows from 2025-06-01 00:00 MDT; windy overnight, calm by day."""
    start = pd.Timestamp("2025-06-01 00:00", tz=MT)
    rows = []
    for i in range(24 * 8):
        local = start + timedelta(hours=i)
        wind = 80 if (local.hour >= 21 or local.hour < 8) else 5
        rows.append(make_row(local, 100, 0, wind))
    return rows
