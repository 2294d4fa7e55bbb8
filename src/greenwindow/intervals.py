# file: src/greenwindow/intervals.py
"""
Interval parsing: raw WEIS feed rows -> typed, local-time interval records.

Rows are validated at this boundary. A row that lacks a usable timestamp or
load forecast is skipped (not-yet-published or invalid data), never raised.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from typing import Iterable, Mapping, Optional

import pandas as pd

from .config import GreenWindowConfig
from .fractions import compute_fractions

logger = logging.getLogger(__name__)

RawRow = Mapping[str, str]

INTERVAL_FORMATS = ("%m/%d/%Y %H:%M:%S", "%m/%d/%Y %H:%M")
LOCAL_ISO_FORMAT = "%Y-%m-%dT%H:%M:%S"

FRAME_COLUMNS = [
    "raw_interval",
    "ds",
    "load",
    "solar_forecast",
    "wind_forecast",
    "scaled_solar",
    "effective_load",
    "fraction",
    "solar_fraction",
    "wind_fraction",
    "is_night",
    "hour_start",
    "local_iso",
]


@dataclass(frozen=True)
class Interval:
    """One hourly forecast interval in local civil time."""
    raw_interval: str
    local_timestamp: pd.Timestamp
    load: float
    solar_forecast: float
    wind_forecast: float
    scaled_solar: float
    effective_load: float
    fraction: float
    solar_fraction: float
    wind_fraction: float
    is_night: bool
    hour_start: pd.Timestamp
    local_iso: str


def clean_row(row: RawRow) -> dict[str, str]:
    return {str(k).strip(): v for k, v in row.items()}


def parse_number(value: Optional[str]) -> float:
    """Parse a numeric feed value; missing, unparsable and NaN become 0.0."""
    if value is None:
        return 0.0
    try:
        number = float(str(value).strip())
    except ValueError:
        return 0.0
    if math.isnan(number):
        return 0.0
    return number


def truncate_to_hour(ts: pd.Timestamp) -> pd.Timestamp:
    # Subtracting the sub-hour part keeps the UTC instant unambiguous across DST.
    return ts - pd.Timedelta(
        minutes=ts.minute,
        seconds=ts.second,
        microseconds=ts.microsecond,
        nanoseconds=ts.nanosecond,
    )


def parse_interval_timestamp(
    raw: str,
    tz,
    offset_hours: int = 1,
) -> Optional[pd.Timestamp]:
    """
    Parse "MM/DD/YYYY HH:MM:SS" into a tz-aware local timestamp.

    The naive wall clock is shifted back by ``offset_hours`` before it is
    localized. Ambiguous fall-back times resolve to the DST occurrence and
    nonexistent spring-forward times shift forward.
    """
    text = str(raw).strip()
    naive = None
    for fmt in INTERVAL_FORMATS:
        try:
            naive = datetime.strptime(text, fmt)
            break
        except ValueError:
            continue
    if naive is None:
        return None

    shifted = naive - timedelta(hours=offset_hours)
    return pd.Timestamp(shifted).tz_localize(
        tz, ambiguous=True, nonexistent="shift_forward"
    )


def parse_row(
    row: RawRow,
    config: Optional[GreenWindowConfig] = None,
) -> Optional[Interval]:
    """Turn one raw feed row into an Interval, or None when the row is skipped."""
    config = config or GreenWindowConfig()
    clean = clean_row(row)

    load = parse_number(clean.get("MTLF"))
    if not load:
        return None

    raw_interval = clean.get("Interval")
    if raw_interval is None or not str(raw_interval).strip():
        return None
    raw_interval = str(raw_interval)

    local_ts = parse_interval_timestamp(
        raw_interval, config.tz(), config.interval_offset_hours
    )
    if local_ts is None:
        logger.debug("[parse] unparsable Interval: %r", raw_interval)
        return None

    solar = parse_number(clean.get("MTSF"))
    wind = parse_number(clean.get("MTWF"))
    fractions = compute_fractions(
        load,
        solar,
        wind,
        solar_scale=config.solar_scale,
        solar_load_correction=config.solar_load_correction,
    )

    hour = local_ts.hour
    return Interval(
        raw_interval=raw_interval,
        local_timestamp=local_ts,
        load=load,
        solar_forecast=solar,
        wind_forecast=wind,
        scaled_solar=fractions.scaled_solar,
        effective_load=fractions.effective_load,
        fraction=fractions.fraction,
        solar_fraction=fractions.solar_fraction,
        wind_fraction=fractions.wind_fraction,
        is_night=hour >= config.night_start_hour or hour < config.day_start_hour,
        hour_start=truncate_to_hour(local_ts),
        local_iso=local_ts.strftime(LOCAL_ISO_FORMAT),
    )


def parse_rows(
    rows: Iterable[RawRow],
    config: Optional[GreenWindowConfig] = None,
) -> list[Interval]:
    """
    Parse every row, dropping skipped rows and duplicate local hours.

    The first row seen for a given local hour wins.
    """
    config = config or GreenWindowConfig()
    intervals: list[Interval] = []
    seen_hours: set[pd.Timestamp] = set()
    n_rows = 0
    n_skipped = 0
    n_duplicates = 0

    for row in rows:
        n_rows += 1
        interval = parse_row(row, config)
        if interval is None:
            n_skipped += 1
            continue
        if interval.hour_start in seen_hours:
            n_duplicates += 1
            logger.debug("[parse] duplicate hour dropped: %s", interval.raw_interval)
            continue
        seen_hours.add(interval.hour_start)
        intervals.append(interval)

    logger.info(
        "[parse] rows=%d intervals=%d skipped=%d duplicate_hours=%d",
        n_rows,
        len(intervals),
        n_skipped,
        n_duplicates,
    )
    return intervals


def intervals_to_frame(intervals: Iterable[Interval]) -> pd.DataFrame:
    """Tabulate intervals as a DataFrame with ``ds`` as the local timestamp."""
    records = [asdict(i) for i in intervals]
    if not records:
        return pd.DataFrame(columns=FRAME_COLUMNS)

    df = pd.DataFrame.from_records(records).rename(columns={"local_timestamp": "ds"})
    return df[FRAME_COLUMNS]
