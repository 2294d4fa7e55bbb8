"""Renewable fraction arithmetic for a single forecast interval."""

from __future__ import annotations

from typing import NamedTuple


class FractionBreakdown(NamedTuple):
    scaled_solar: float
    effective_load: float
    fraction: float
    solar_fraction: float
    wind_fraction: float


def compute_fractions(
    load: float,
    solar_forecast: float,
    wind_forecast: float,
    *,
    solar_scale: float = 1.4,
    solar_load_correction: float = 0.4,
) -> FractionBreakdown:
    """
    Compute the solar, wind and total renewable share of the corrected load.

    Solar is boosted by ``solar_scale`` while the load is raised by a smaller
    ``solar_load_correction`` share of the raw solar forecast. A zero
    effective load yields 0 for both divided fractions.
    """
    scaled_solar = solar_forecast * solar_scale
    effective_load = load + solar_forecast * solar_load_correction

    if effective_load != 0:
        fraction = (scaled_solar + wind_forecast) / effective_load
        solar_fraction = scaled_solar / effective_load
    else:
        fraction = 0.0
        solar_fraction = 0.0

    # Wind share is the remainder, not an independent division.
    wind_fraction = fraction - solar_fraction

    return FractionBreakdown(
        scaled_solar=scaled_solar,
        effective_load=effective_load,
        fraction=fraction,
        solar_fraction=solar_fraction,
        wind_fraction=wind_fraction,
    )
