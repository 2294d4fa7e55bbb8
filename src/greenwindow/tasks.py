from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

import requests

from .classify import classify_intervals, compute_threshold
from .config import GreenWindowConfig
from .daily_calendar import CalendarDay, build_calendar
from .intervals import intervals_to_frame, parse_rows, truncate_to_hour
from .presentation import (
    ChartData,
    TableData,
    build_chart_data,
    build_table,
    format_updated,
)
from .status import (
    UNKNOWN_STATUS,
    UNKNOWN_WINDOW,
    GreenWindow,
    StatusBox,
    build_green_window,
    build_status_box,
    find_current_green,
)
from .validation import validate_interval_frame
from .weis_api import WeisFeed, fetch_weis_feed
from .window import Instant, filter_window, local_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GreenWindowResult:
    updated_display: str
    status_box: StatusBox
    green_window: GreenWindow
    calendar: list[CalendarDay] = field(default_factory=list)
    chart: ChartData = field(default_factory=ChartData)
    table: TableData = field(default_factory=TableData)
    threshold: Optional[float] = None
    interval_count: int = 0

    def to_payload(self) -> dict:
        """camelCase JSON contract consumed by the rendering layer."""
        return {
            "updatedDisplay": self.updated_display,
            "statusBox": self.status_box.to_payload(),
            "greenWindow": self.green_window.to_payload(),
            "calendar": [day.to_payload() for day in self.calendar],
            "chart": self.chart.to_payload(),
            "table": self.table.to_payload(),
        }


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def empty_result(updated: str, config: Optional[GreenWindowConfig] = None) -> GreenWindowResult:
    """Well-formed result for a window with no intervals."""
    config = config or GreenWindowConfig()
    return GreenWindowResult(
        updated_display=format_updated(updated, config.tz()),
        status_box=UNKNOWN_STATUS,
        green_window=UNKNOWN_WINDOW,
        table=TableData(headers=[], rows=[]),
    )


def process_weis_data(
    feed: WeisFeed,
    config: Optional[GreenWindowConfig] = None,
    reference_instant: Optional[Instant] = None,
) -> GreenWindowResult:
    """
    Run the interval pipeline on a fetched feed.

    Pure given (feed, config, reference_instant): the same inputs always give
    the same result.
    """
    config = config or GreenWindowConfig()
    tz = config.tz()
    if reference_instant is None:
        reference_instant = _utc_now()

    intervals = parse_rows(feed.rows, config)
    frame = intervals_to_frame(intervals)
    window = filter_window(frame, reference_instant, tz, config.horizon_days)

    if window.empty:
        logger.warning("[pipeline] no intervals inside the %d-day window", config.horizon_days)
        return empty_result(feed.updated, config)

    report = validate_interval_frame(window)
    if not report.ok:
        logger.warning("[pipeline] series check: %s %s", report.message, report.details)

    threshold = compute_threshold(window, cap=config.threshold_cap)
    classified = classify_intervals(window, threshold)

    now_hour = truncate_to_hour(local_now(reference_instant, tz))
    current_green = find_current_green(classified, now_hour)

    return GreenWindowResult(
        updated_display=format_updated(feed.updated, tz),
        status_box=build_status_box(current_green),
        green_window=build_green_window(classified, now_hour, current_green),
        calendar=build_calendar(
            classified,
            day_start_hour=config.day_start_hour,
            night_start_hour=config.night_start_hour,
            good_hours_min=config.good_hours_min,
            skip_leading=config.calendar_skip_leading,
            days=config.calendar_days,
        ),
        chart=build_chart_data(classified),
        table=build_table(classified, threshold),
        threshold=threshold,
        interval_count=len(classified),
    )


def run_full_pipeline(
    config: Optional[GreenWindowConfig] = None,
    reference_instant: Optional[Instant] = None,
    session: Optional[requests.Session] = None,
) -> GreenWindowResult:
    config = config or GreenWindowConfig()

    feed = fetch_weis_feed(config, session=session)
    result = process_weis_data(feed, config, reference_instant)

    logger.info(
        "[pipeline] status=%s window=%dh intervals=%d calendar_days=%d",
        result.status_box.status,
        result.green_window.duration_hours,
        result.interval_count,
        len(result.calendar),
    )
    return result
