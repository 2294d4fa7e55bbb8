"""Integrity report for the parsed hourly interval series."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntervalValidationReport:
    ok: bool
    message: str
    details: dict


def validate_interval_frame(df: pd.DataFrame, *, max_missing_to_report: int = 10) -> IntervalValidationReport:
    """
    Check the interval frame for duplicate hours, gaps and ordering.

    The report is informational; a failing report never stops processing.
    """
    required = {"ds", "hour_start", "fraction"}
    missing_cols = required - set(df.columns)
    if missing_cols:
        return IntervalValidationReport(
            False,
            "Missing required columns",
            {"missing_cols": sorted(missing_cols)},
        )

    if df.empty:
        return IntervalValidationReport(False, "Interval series is empty", {"row_count": 0})

    hours = pd.to_datetime(df["hour_start"], utc=True)
    n_duplicates = int(hours.duplicated(keep=False).sum())
    is_monotonic = bool(hours.is_monotonic_increasing)

    expected = pd.date_range(start=hours.min(), end=hours.max(), freq="h")
    missing = sorted(set(expected) - set(hours))

    details = {
        "row_count": int(len(df)),
        "duplicate_hours": n_duplicates,
        "missing_hours": len(missing),
        "missing_sample": [ts.isoformat() for ts in missing[:max_missing_to_report]],
        "is_monotonic": is_monotonic,
        "start": hours.min().isoformat(),
        "end": hours.max().isoformat(),
    }

    if n_duplicates:
        return IntervalValidationReport(False, "Duplicate hours found", details)
    if missing:
        return IntervalValidationReport(False, "Missing hours found", details)
    if not is_monotonic:
        return IntervalValidationReport(False, "Series is not sorted by time", details)
    return IntervalValidationReport(True, "OK", details)
