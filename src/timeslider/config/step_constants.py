"""Centralized thresholds for step interval inference.

When no data source specifies a step interval, the slider picks one from the
elapsed range of the full extent. Thresholds are in milliseconds and are
checked in the order of ``StepThresholds.LADDER``; the first match wins.
"""

from __future__ import annotations

from src.domain.time import (
    DAYS_PER_CENTURY,
    DAYS_PER_YEAR,
    MILLISECONDS_PER_DAY,
    MILLISECONDS_PER_HOUR,
    MILLISECONDS_PER_MINUTE,
    TimeUnit,
)


class StepThresholds:
    """Named range thresholds (ms) for the inferred step unit."""

    SECONDS_BELOW = MILLISECONDS_PER_MINUTE
    MINUTES_BELOW = MILLISECONDS_PER_HOUR
    HOURS_BELOW = MILLISECONDS_PER_DAY
    DAYS_BELOW = MILLISECONDS_PER_DAY * DAYS_PER_YEAR

    # Strictly greater than; anything between a year and a century is YEARS.
    # There is no decade tier.
    CENTURIES_ABOVE = MILLISECONDS_PER_DAY * DAYS_PER_CENTURY

    LADDER: tuple[tuple[float, TimeUnit], ...] = (
        (SECONDS_BELOW, TimeUnit.SECONDS),
        (MINUTES_BELOW, TimeUnit.MINUTES),
        (HOURS_BELOW, TimeUnit.HOURS),
        (DAYS_BELOW, TimeUnit.DAYS),
    )

    FALLBACK_UNIT = TimeUnit.YEARS

    # Requested intervals producing more steps than this fall back to the
    # inferred interval for the span.
    MAX_STEPS = 1_000_000
