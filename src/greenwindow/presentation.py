"""
Chart and table shapes for the rendering layer.

Every numeric value is guarded against NaN/inf again here: the wind share is
derived by subtraction and can carry a NaN even when its operands were
guarded where they were computed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

import pandas as pd

TABLE_HEADERS = [
    "Interval",
    "MTLF",
    "MTSF",
    "MTWF",
    "MTSF*1.4",
    "MTLFX",
    "Fraction",
    "Solar Fraction",
    "Wind Fraction",
    "Green",
    "MT Time",
]

_TABLE_NUMERIC = [
    "load",
    "solar_forecast",
    "wind_forecast",
    "scaled_solar",
    "effective_load",
    "fraction",
    "solar_fraction",
    "wind_fraction",
]


@dataclass(frozen=True)
class ChartData:
    labels: list[str] = field(default_factory=list)
    solar_stack: list[float] = field(default_factory=list)
    wind_stack: list[float] = field(default_factory=list)
    fraction_line: list[float] = field(default_factory=list)
    fraction_colors: list[str] = field(default_factory=list)

    def to_payload(self) -> dict:
        return {
            "labels": list(self.labels),
            "solarStack": list(self.solar_stack),
            "windStack": list(self.wind_stack),
            "fractionLine": list(self.fraction_line),
            "fractionColors": list(self.fraction_colors),
        }


@dataclass(frozen=True)
class TableData:
    headers: list[str] = field(default_factory=lambda: list(TABLE_HEADERS))
    rows: list[list[str]] = field(default_factory=list)

    def to_payload(self) -> dict:
        return {"headers": list(self.headers), "rows": [list(r) for r in self.rows]}


def _finite(value: float) -> float:
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return value


def _css_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_updated(updated: str, tz) -> str:
    """
    Render the feed's ``updated`` stamp in civil time, e.g. "3/4/2025, 1:05:00 PM".

    Naive stamps are taken as UTC; an unparsable stamp is shown verbatim.
    """
    try:
        ts = pd.Timestamp(updated)
    except (ValueError, TypeError):
        return f"Last updated from SPP WEIS: {updated}"
    if pd.isna(ts):
        return f"Last updated from SPP WEIS: {updated}"
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    ts = ts.tz_convert(tz)

    hour12 = ts.hour % 12 or 12
    meridiem = "AM" if ts.hour < 12 else "PM"
    shown = (
        f"{ts.month}/{ts.day}/{ts.year}, "
        f"{hour12}:{ts.minute:02d}:{ts.second:02d} {meridiem}"
    )
    return f"Last updated from SPP WEIS: {shown}"


def fraction_color(fraction: float) -> str:
    """Green hue whose lightness tracks the renewable fraction clamped to [0, 1]."""
    clamped = max(0.0, min(_finite(fraction), 1.0))
    lightness = 5 + clamped * 55
    return f"hsl(120, 100%, {_css_number(lightness)}%)"


def build_chart_data(classified: pd.DataFrame) -> ChartData:
    if classified.empty:
        return ChartData()

    return ChartData(
        labels=classified["local_iso"].astype(str).tolist(),
        solar_stack=[_finite(v) for v in classified["solar_fraction"]],
        wind_stack=[_finite(v) for v in classified["wind_fraction"]],
        fraction_line=[_finite(v) for v in classified["fraction"]],
        fraction_colors=[fraction_color(v) for v in classified["fraction"]],
    )


def _fixed2(value: float) -> str:
    # ties round half-up on the exact binary value: 0.125 -> "0.13"
    rounded = Decimal(_finite(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        return "0.00"
    return f"{rounded:.2f}"


def build_table(classified: pd.DataFrame, threshold: float) -> TableData:
    rows: list[list[str]] = []
    for rec in classified.to_dict(orient="records"):
        green = "1" if float(rec["fraction"]) > threshold else "0"
        rows.append(
            [str(rec["raw_interval"])]
            + [_fixed2(rec[col]) for col in _TABLE_NUMERIC]
            + [green, str(rec["local_iso"])]
        )
    return TableData(headers=list(TABLE_HEADERS), rows=rows)
