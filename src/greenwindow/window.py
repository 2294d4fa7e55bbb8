"""Restrict the interval frame to the fixed horizon starting at local midnight."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Union

import pandas as pd

logger = logging.getLogger(__name__)

Instant = Union[datetime, pd.Timestamp, str]


def local_now(reference_instant: Instant, tz) -> pd.Timestamp:
    """
    Convert an explicit reference instant to the civil timezone.

    Naive instants are taken as UTC.
    """
    ts = pd.Timestamp(reference_instant)
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return ts.tz_convert(tz)


def local_midnight(reference_instant: Instant, tz) -> pd.Timestamp:
    return local_now(reference_instant, tz).normalize()


def filter_window(
    df: pd.DataFrame,
    reference_instant: Instant,
    tz,
    horizon_days: int = 7,
) -> pd.DataFrame:
    """
    Keep rows with ``ds`` in [midnight, midnight + horizon_days), sorted by ``ds``.

    "Today" comes from ``reference_instant``, never from the feed itself.
    """
    if df.empty:
        return df.copy()

    start = local_midnight(reference_instant, tz)
    end = start + pd.Timedelta(days=horizon_days)

    ds = pd.to_datetime(df["ds"], utc=True)
    mask = (ds >= start) & (ds < end)
    window = df.loc[mask].sort_values("ds").reset_index(drop=True)

    logger.info(
        "[window] %s -> %s kept=%d dropped=%d",
        start.isoformat(),
        end.isoformat(),
        len(window),
        len(df) - len(window),
    )
    return window
