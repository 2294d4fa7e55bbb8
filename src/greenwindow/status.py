# file: src/greenwindow/status.py
"""
Current grid status and the contiguous green (or carbon-heavy) window from now.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

import pandas as pd

from .intervals import truncate_to_hour

GridStatus = Literal["green", "carbon", "unknown"]

UNKNOWN_WINDOW_TEXT = "Current green status unknown."


@dataclass(frozen=True)
class StatusBox:
    status: GridStatus
    text: str

    def to_payload(self) -> dict:
        return {"status": self.status, "text": self.text}


@dataclass(frozen=True)
class GreenWindow:
    text: str
    duration_hours: int
    is_currently_green: Optional[bool]

    def to_payload(self) -> dict:
        return {
            "text": self.text,
            "durationHours": self.duration_hours,
            "isCurrentlyGreen": self.is_currently_green,
        }


UNKNOWN_STATUS = StatusBox(status="unknown", text="Current grid status: Unknown")
UNKNOWN_WINDOW = GreenWindow(text=UNKNOWN_WINDOW_TEXT, duration_hours=0, is_currently_green=None)


def _current_position(classified: pd.DataFrame, now_hour: pd.Timestamp) -> Optional[int]:
    if classified.empty:
        return None
    hits = (classified["hour_start"] == truncate_to_hour(now_hour)).to_numpy().nonzero()[0]
    if len(hits) == 0:
        return None
    return int(hits[0])


def find_current_green(classified: pd.DataFrame, now_hour: pd.Timestamp) -> Optional[bool]:
    """Green flag of the interval covering ``now_hour``, or None when absent."""
    pos = _current_position(classified, now_hour)
    if pos is None:
        return None
    return bool(classified["is_green"].iloc[pos])


def build_status_box(current_green: Optional[bool]) -> StatusBox:
    if current_green is True:
        return StatusBox(status="green", text="Current grid status: Clean and GREEN!")
    if current_green is False:
        return StatusBox(status="carbon", text="Current grid status: Carbon-Heavy")
    return UNKNOWN_STATUS


def _plural(n: int) -> str:
    return "" if n == 1 else "s"


def build_green_window(
    classified: pd.DataFrame,
    now_hour: pd.Timestamp,
    current_green: Optional[bool],
) -> GreenWindow:
    """
    Count the run of same-class intervals starting at now and walking forward.

    The run stops at the first interval of the other class or at the end of
    the window; it never wraps around.
    """
    pos = _current_position(classified, now_hour)
    if current_green is None or pos is None:
        return UNKNOWN_WINDOW

    flags = classified["is_green"].astype(bool).tolist()
    duration = 0
    for flag in flags[pos:]:
        if flag != current_green:
            break
        duration += 1

    if current_green:
        text = f"Green for the next {duration} hour{_plural(duration)}"
    else:
        text = f"Grid will be green in {duration} hour{_plural(duration)}"
    return GreenWindow(text=text, duration_hours=duration, is_currently_green=current_green)
