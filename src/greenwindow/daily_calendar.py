# file: src/greenwindow/daily_calendar.py
"""
Per-day calendar of green hours, split into a day and a night sub-window.

A night belongs to the date it starts on: green hours before the start of
the day window count toward the previous date's night.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

import pandas as pd

logger = logging.getLogger(__name__)

EMPTY_RANGE = "—"
RANGE_DASH = "–"


@dataclass(frozen=True)
class CalendarDay:
    iso_date: str
    weekday_short: str
    day_hours: tuple[int, ...]
    night_hours: tuple[int, ...]
    day_ranges: str
    night_ranges: str
    day_is_good: bool
    night_is_good: bool

    def to_payload(self) -> dict:
        return {
            "isoDate": self.iso_date,
            "weekdayShort": self.weekday_short,
            "dayRanges": self.day_ranges,
            "nightRanges": self.night_ranges,
            "dayIsGood": self.day_is_good,
            "nightIsGood": self.night_is_good,
        }


def _hour_label(h: int) -> str:
    hour = h % 12 or 12
    suffix = "A" if h < 12 else "P"
    return f"{hour}{suffix}"


def hours_to_ranges(hours: Iterable[int]) -> str:
    """
    Compress hour-of-day integers into "8A–11A, 1P–2P" style labels.

    Consecutive hours merge into one range; the end label is exclusive
    (a single hour h renders as h–(h+1)).
    """
    ordered = sorted(set(int(h) for h in hours))
    if not ordered:
        return EMPTY_RANGE

    ranges: list[tuple[int, int]] = []
    start = prev = ordered[0]
    for h in ordered[1:]:
        if h != prev + 1:
            ranges.append((start, prev))
            start = h
        prev = h
    ranges.append((start, prev))

    return ", ".join(f"{_hour_label(s)}{RANGE_DASH}{_hour_label(e + 1)}" for s, e in ranges)


def bucket_green_hours(
    classified: pd.DataFrame,
    day_start_hour: int = 8,
    night_start_hour: int = 21,
) -> dict[date, tuple[list[int], list[int]]]:
    """
    Map each local date to its (green day hours, green night hours), ordered by date.

    Every interval registers its own date; early-morning intervals also
    register the previous date, which receives their night hours.
    """
    if classified.empty:
        return {}

    stamps = pd.Series(classified["hour_start"]).reset_index(drop=True)
    green = classified["is_green"].astype(bool).reset_index(drop=True)
    hours = [ts.hour for ts in stamps]
    dates = [ts.date() for ts in stamps]

    buckets: dict[date, tuple[list[int], list[int]]] = {}
    for d, hour, is_green in zip(dates, hours, green):
        buckets.setdefault(d, ([], []))

        if day_start_hour <= hour < night_start_hour:
            if is_green:
                buckets[d][0].append(hour)
            continue

        night_date = d - timedelta(days=1) if hour < day_start_hour else d
        buckets.setdefault(night_date, ([], []))
        if is_green:
            buckets[night_date][1].append(hour)

    return {d: buckets[d] for d in sorted(buckets)}


def build_calendar(
    classified: pd.DataFrame,
    *,
    day_start_hour: int = 8,
    night_start_hour: int = 21,
    good_hours_min: int = 5,
    skip_leading: int = 1,
    days: int = 7,
) -> list[CalendarDay]:
    """
    Build calendar entries for the dates after the leading partial date.

    The first date key only carries night hours seeded by the first early
    morning, so it is skipped and the next ``days`` dates are reported.
    """
    buckets = bucket_green_hours(classified, day_start_hour, night_start_hour)
    selected = list(buckets)[skip_leading:skip_leading + days]

    calendar = []
    for d in selected:
        day_hours, night_hours = buckets[d]
        calendar.append(
            CalendarDay(
                iso_date=d.isoformat(),
                weekday_short=d.strftime("%a"),
                day_hours=tuple(sorted(day_hours)),
                night_hours=tuple(sorted(night_hours)),
                day_ranges=hours_to_ranges(day_hours),
                night_ranges=hours_to_ranges(night_hours),
                day_is_good=len(day_hours) >= good_hours_min,
                night_is_good=len(night_hours) >= good_hours_min,
            )
        )

    logger.info("[calendar] date_keys=%d reported=%d", len(buckets), len(calendar))
    return calendar
