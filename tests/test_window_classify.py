"""Tests for the horizon filter, threshold and classification."""

from datetime import timedelta

import pandas as pd
import pytest

from greenwindow.classify import classify_intervals, compute_threshold
from greenwindow.intervals import intervals_to_frame, parse_rows
from greenwindow.window import filter_window, local_midnight, local_now
from tests.feed_builders import MT, make_row


class TestLocalTime:
    """Tests for reference instant handling."""

    def test_naive_instant_is_utc(self):
        ts = local_now(pd.Timestamp("2025-06-02 03:00"), MT)
        assert ts.strftime("%Y-%m-%d %H:%M") == "2025-06-01 21:00"

    def test_midnight_is_local(self):
        midnight = local_midnight("2025-06-02T05:30:00Z", MT)
        assert midnight == pd.Timestamp("2025-06-01 00:00", tz=MT)


class TestFilterWindow:
    """Tests for the 7-day window from local midnight."""

    def test_keeps_half_open_window(self, reference_instant):
        midnight = pd.Timestamp("2025-06-02 00:00", tz=MT)
        stamps = [
            midnight - timedelta(hours=1),
            midnight,
            midnight + timedelta(days=7) - timedelta(hours=1),
            midnight + timedelta(days=7),
        ]
        df = intervals_to_frame(parse_rows([make_row(ts, 100, 0, 10) for ts in stamps]))

        window = filter_window(df, reference_instant, MT)

        assert window["local_iso"].tolist() == ["2025-06-02T00:00:00", "2025-06-08T23:00:00"]

    def test_sorts_ascending(self, reference_instant, three_hour_rows):
        df = intervals_to_frame(parse_rows(list(reversed(three_hour_rows))))
        window = filter_window(df, reference_instant, MT)
        assert window["ds"].is_monotonic_increasing

    def test_does_not_mutate_input(self, reference_instant, three_hour_rows):
        df = intervals_to_frame(parse_rows(three_hour_rows))
        before = df.copy()
        filter_window(df, reference_instant, MT)
        pd.testing.assert_frame_equal(df, before)

    def test_empty_when_outside_horizon(self, three_hour_rows):
        df = intervals_to_frame(parse_rows(three_hour_rows))
        window = filter_window(df, pd.Timestamp("2025-07-01 12:00", tz=MT), MT)
        assert window.empty

    def test_empty_input(self, reference_instant):
        assert filter_window(intervals_to_frame([]), reference_instant, MT).empty


class TestThreshold:
    """Tests for the adaptive threshold."""

    def test_capped_at_045(self):
        df = pd.DataFrame({"fraction": [0.9, 0.8, 0.7]})
        assert compute_threshold(df) == 0.45

    def test_equals_mean_below_cap(self):
        df = pd.DataFrame({"fraction": [0.1, 0.2, 0.3]})
        assert compute_threshold(df) == pytest.approx(0.2)

    def test_custom_cap(self):
        df = pd.DataFrame({"fraction": [0.5, 0.5]})
        assert compute_threshold(df, cap=0.3) == 0.3

    def test_empty_window_raises(self):
        with pytest.raises(ValueError, match="empty window"):
            compute_threshold(pd.DataFrame({"fraction": []}))


class TestClassify:
    """Tests for strict green classification."""

    def test_equal_to_threshold_is_not_green(self):
        df = pd.DataFrame({
            "ds": pd.date_range("2025-06-02", periods=3, freq="h", tz=MT),
            "fraction": [0.2, 0.3, 0.31],
        })
        classified = classify_intervals(df, 0.3)
        assert classified["is_green"].tolist() == [False, False, True]

    def test_returns_new_frame(self):
        df = pd.DataFrame({
            "ds": pd.date_range("2025-06-02", periods=2, freq="h", tz=MT),
            "fraction": [0.2, 0.6],
        })
        classified = classify_intervals(df, 0.3)
        assert "is_green" not in df.columns
        assert classified is not df

    def test_example_three_rows(self, reference_instant, three_hour_rows):
        """MTSF 50/0/0 and MTWF 10/10/60 at MTLF 100: threshold caps at 0.45."""
        window = filter_window(
            intervals_to_frame(parse_rows(three_hour_rows)), reference_instant, MT
        )
        threshold = compute_threshold(window)
        mean = (80 / 120 + 0.1 + 0.6) / 3

        assert threshold == pytest.approx(min(mean, 0.45))
        classified = classify_intervals(window, threshold)
        assert classified["is_green"].tolist() == [True, False, True]
