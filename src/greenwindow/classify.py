"""Adaptive green threshold and per-interval classification."""

from __future__ import annotations

import logging

import pandas as pd

logger = logging.getLogger(__name__)


def compute_threshold(df: pd.DataFrame, cap: float = 0.45) -> float:
    """
    Threshold = min(mean renewable fraction over the window, cap).

    The cap keeps an unusually clean horizon from marking every hour green.
    """
    if df.empty:
        raise ValueError("Cannot compute a threshold over an empty window")

    mean_fraction = float(df["fraction"].mean())
    threshold = min(mean_fraction, cap)
    logger.info(
        "[classify] mean_fraction=%.4f cap=%.2f threshold=%.4f",
        mean_fraction,
        cap,
        threshold,
    )
    return threshold


def classify_intervals(df: pd.DataFrame, threshold: float) -> pd.DataFrame:
    """Return a new frame with ``is_green`` (strictly above threshold), sorted by ``ds``."""
    classified = df.copy()
    classified["is_green"] = classified["fraction"].astype(float) > threshold
    classified = classified.sort_values("ds").reset_index(drop=True)

    logger.info(
        "[classify] green=%d of %d intervals",
        int(classified["is_green"].sum()),
        len(classified),
    )
    return classified
