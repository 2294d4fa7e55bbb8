"""Tests for chart/table shaping and the NaN display guard."""

import math

import pandas as pd

from greenwindow.presentation import (
    TABLE_HEADERS,
    build_chart_data,
    build_table,
    format_updated,
    fraction_color,
)
from tests.feed_builders import MT


def _classified(fractions, solar=None, wind=None):
    n = len(fractions)
    solar = solar if solar is not None else [0.0] * n
    wind = wind if wind is not None else [f - s for f, s in zip(fractions, solar)]
    return pd.DataFrame({
        "raw_interval": [f"06/02/2025 {h + 1:02d}:00:00" for h in range(n)],
        "local_iso": [f"2025-06-02T{h:02d}:00:00" for h in range(n)],
        "load": [100.0] * n,
        "solar_forecast": [0.0] * n,
        "wind_forecast": [f * 100 for f in fractions],
        "scaled_solar": [0.0] * n,
        "effective_load": [100.0] * n,
        "fraction": fractions,
        "solar_fraction": solar,
        "wind_fraction": wind,
    })


class TestFormatUpdated:
    """Tests for the updated-at display string."""

    def test_utc_to_mountain(self):
        shown = format_updated("2025-06-02T20:05:09Z", MT)
        assert shown == "Last updated from SPP WEIS: 6/2/2025, 2:05:09 PM"

    def test_naive_is_utc(self):
        shown = format_updated("2025-01-15T07:00:00", MT)
        assert shown == "Last updated from SPP WEIS: 1/15/2025, 12:00:00 AM"

    def test_unparsable_shown_verbatim(self):
        assert format_updated("yesterday-ish", MT) == "Last updated from SPP WEIS: yesterday-ish"


class TestFractionColor:
    """Tests for the lightness ramp."""

    def test_ramp(self):
        assert fraction_color(0.0) == "hsl(120, 100%, 5%)"
        assert fraction_color(0.5) == "hsl(120, 100%, 32.5%)"
        assert fraction_color(1.0) == "hsl(120, 100%, 60%)"

    def test_clamped(self):
        assert fraction_color(2.5) == "hsl(120, 100%, 60%)"
        assert fraction_color(-1.0) == "hsl(120, 100%, 5%)"

    def test_nan_is_dark(self):
        assert fraction_color(float("nan")) == "hsl(120, 100%, 5%)"


class TestChartData:
    """Tests for parallel chart series."""

    def test_parallel_arrays(self):
        chart = build_chart_data(_classified([0.2, 0.5], solar=[0.1, 0.0]))

        assert chart.labels == ["2025-06-02T00:00:00", "2025-06-02T01:00:00"]
        assert chart.solar_stack == [0.1, 0.0]
        assert chart.wind_stack[0] == 0.2 - 0.1
        assert chart.fraction_line == [0.2, 0.5]
        assert chart.fraction_colors[1] == "hsl(120, 100%, 32.5%)"

    def test_nan_replaced_by_zero(self):
        df = _classified([0.4], solar=[0.1], wind=[float("nan")])
        chart = build_chart_data(df)
        assert chart.wind_stack == [0.0]
        assert not any(math.isnan(v) for v in chart.wind_stack)

    def test_empty(self):
        payload = build_chart_data(_classified([])).to_payload()
        assert payload == {
            "labels": [],
            "solarStack": [],
            "windStack": [],
            "fractionLine": [],
            "fractionColors": [],
        }


class TestTable:
    """Tests for the tabular view."""

    def test_row_format(self):
        table = build_table(_classified([0.456, 0.1]), threshold=0.3)

        assert table.headers == TABLE_HEADERS
        assert table.rows[0] == [
            "06/02/2025 01:00:00",
            "100.00",
            "0.00",
            "45.60",
            "0.00",
            "100.00",
            "0.46",
            "0.00",
            "0.46",
            "1",
            "2025-06-02T00:00:00",
        ]
        assert table.rows[1][9] == "0"

    def test_green_is_strict(self):
        table = build_table(_classified([0.3]), threshold=0.3)
        assert table.rows[0][9] == "0"

    def test_ties_round_half_up(self):
        df = _classified([0.125])
        df["load"] = [100.125]
        row = build_table(df, threshold=0.3).rows[0]

        assert row[1] == "100.13"
        assert row[6] == "0.13"
        assert row[8] == "0.13"

    def test_negative_zero_not_shown(self):
        df = _classified([0.0], solar=[0.001], wind=[-0.001])
        assert build_table(df, threshold=0.3).rows[0][8] == "0.00"

    def test_nan_formatted_as_zero(self):
        df = _classified([0.4], solar=[0.1], wind=[float("nan")])
        assert build_table(df, threshold=0.3).rows[0][8] == "0.00"
