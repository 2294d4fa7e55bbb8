# file: src/greenwindow/config.py
"""
Pipeline configuration for the clean energy window.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        logger.warning("[config] %s=%r is not an int, using %s", name, raw, default)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, str(default))
    try:
        return float(raw)
    except ValueError:
        logger.warning("[config] %s=%r is not a float, using %s", name, raw, default)
        return default


@dataclass(frozen=True)
class GreenWindowConfig:
    # Upstream feed
    source_url: str = "https://weis-api.vercel.app/api/weis"
    request_timeout: int = 30
    max_retries: int = 3
    backoff_factor: float = 0.5

    # Civil time
    local_timezone: str = "America/Denver"
    interval_offset_hours: int = 1  # feed stamps run one hour ahead

    # Fraction corrections
    solar_scale: float = 1.4
    solar_load_correction: float = 0.4

    # Classification
    threshold_cap: float = 0.45
    horizon_days: int = 7

    # Calendar
    day_start_hour: int = 8
    night_start_hour: int = 21
    good_hours_min: int = 5
    calendar_days: int = 7
    calendar_skip_leading: int = 1

    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.local_timezone)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "GreenWindowConfig":
        """
        Build a config from environment variables (and .env if present).

        Malformed numeric values fall back to the defaults.
        """
        path = dotenv_path or find_dotenv(usecwd=True)
        if path:
            load_dotenv(path, override=False)
            logger.info("[config] loaded .env: %s", path)

        defaults = cls()
        return cls(
            source_url=os.getenv("WEIS_SOURCE_URL", defaults.source_url),
            request_timeout=_env_int("WEIS_TIMEOUT", defaults.request_timeout),
            max_retries=_env_int("WEIS_MAX_RETRIES", defaults.max_retries),
            local_timezone=os.getenv("WEIS_TIMEZONE", defaults.local_timezone),
            threshold_cap=_env_float("WEIS_THRESHOLD_CAP", defaults.threshold_cap),
            horizon_days=_env_int("WEIS_HORIZON_DAYS", defaults.horizon_days),
        )
