"""
Step model: discretization of a full time extent into uniform steps.

Given the aggregated full extent and step interval, this module derives the
number of steps, the step boundary timestamps, and the conversion between
step indices and timestamps.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime

import numpy as np

from src.domain.time import TimeExtent, TimeUnit, TimeValue, from_epoch_ms, to_epoch_ms
from src.timeslider.config.step_constants import StepThresholds

logger = logging.getLogger(__name__)


def estimate_time_unit(range_ms: float) -> TimeUnit:
    """
    Pick a step unit from the elapsed range of the data.

    Parameters
    ----------
    range_ms : float
        Elapsed range in milliseconds

    Returns
    -------
    TimeUnit
        SECONDS, MINUTES, HOURS, DAYS, YEARS or CENTURIES
    """
    for upper_bound, unit in StepThresholds.LADDER:
        if range_ms < upper_bound:
            return unit
    if range_ms > StepThresholds.CENTURIES_ABOVE:
        return TimeUnit.CENTURIES
    return StepThresholds.FALLBACK_UNIT


def infer_step_interval(full_extent: TimeExtent) -> TimeValue:
    """One unit of :func:`estimate_time_unit` for the extent's span."""
    return TimeValue(1.0, estimate_time_unit(full_extent.duration_ms))


@dataclass(frozen=True)
class StepModel:
    """
    Uniform discretization of a full time extent.

    ``step_times_ms[i] == full_extent.start + i * interval_ms`` (in epoch
    milliseconds, rounded up to whole ms). When the range does not divide
    evenly the last step may lie beyond the end of the extent.

    Attributes
    ----------
    full_extent : TimeExtent
        Extent being discretized (may be empty)
    interval : TimeValue | None
        Step interval; None for an empty model
    interval_ms : float
        Step interval in milliseconds (always positive)
    step_times_ms : np.ndarray
        int64 epoch milliseconds of each step boundary
    """

    full_extent: TimeExtent = field(default_factory=TimeExtent.empty)
    interval: TimeValue | None = None
    interval_ms: float = 1.0
    step_times_ms: np.ndarray = field(
        default_factory=lambda: np.empty(0, dtype=np.int64), compare=False
    )

    @classmethod
    def build(
        cls,
        full_extent: TimeExtent,
        interval: TimeValue | None = None,
        min_interval_ms: float = 1.0,
    ) -> StepModel:
        """
        Discretize ``full_extent``.

        Parameters
        ----------
        full_extent : TimeExtent
            Union extent of the participating sources
        interval : TimeValue | None
            Interval requested by the sources; inferred from the span if None
        min_interval_ms : float
            Lower bound on a positive interval; a non-positive interval is
            replaced by the one inferred from the span

        Returns
        -------
        StepModel
            Empty model (zero steps) for an empty extent
        """
        if full_extent.is_empty:
            return cls()

        if interval is None:
            interval = infer_step_interval(full_extent)
            logger.debug(f"Inferred step interval {interval} for span {full_extent.duration_ms} ms")

        range_ms = full_extent.duration_ms
        interval_ms = interval.to_milliseconds()
        if not (math.isfinite(interval_ms) and interval_ms > 0):
            inferred = infer_step_interval(full_extent)
            logger.warning(f"Step interval {interval} is not a positive length, using {inferred}")
            interval, interval_ms = inferred, inferred.to_milliseconds()
        elif interval_ms < min_interval_ms:
            logger.warning(
                f"Step interval {interval} is below {min_interval_ms} ms, using {min_interval_ms} ms"
            )
            interval_ms = float(min_interval_ms)

        number_of_steps = int(math.floor(range_ms / interval_ms)) + 1
        if number_of_steps > StepThresholds.MAX_STEPS:
            inferred = infer_step_interval(full_extent)
            logger.warning(
                f"Step interval {interval} yields {number_of_steps} steps "
                f"(limit {StepThresholds.MAX_STEPS}), using {inferred}"
            )
            interval, interval_ms = inferred, inferred.to_milliseconds()
            number_of_steps = int(math.floor(range_ms / interval_ms)) + 1

        # Offsets round up so that index_at(time_at(i)) == i for intervals >= 1 ms
        offsets = np.arange(number_of_steps, dtype=np.float64) * interval_ms
        step_times_ms = full_extent.start_ms + np.ceil(offsets).astype(np.int64)

        return cls(
            full_extent=full_extent,
            interval=interval,
            interval_ms=interval_ms,
            step_times_ms=step_times_ms,
        )

    @property
    def is_empty(self) -> bool:
        return self.full_extent.is_empty

    @property
    def number_of_steps(self) -> int:
        return int(self.step_times_ms.shape[0])

    @property
    def step_times(self) -> list[datetime]:
        """Step boundary timestamps as aware UTC datetimes."""
        return [from_epoch_ms(ms) for ms in self.step_times_ms.tolist()]

    def time_at(self, index: int) -> datetime | None:
        """
        Timestamp of step ``index``.

        The index is not range-checked: out-of-range indices extrapolate
        along the step grid. Returns None for an empty model.
        """
        if self.is_empty:
            return None
        return from_epoch_ms(self.full_extent.start_ms + math.ceil(index * self.interval_ms))

    def index_at(self, timestamp: datetime) -> int | None:
        """
        Step index at or before ``timestamp`` (floor division on the grid).

        Timestamps outside the full extent yield negative or too-large
        indices. Returns None for an empty model.
        """
        if self.is_empty:
            return None
        offset_ms = to_epoch_ms(timestamp) - self.full_extent.start_ms
        return int(math.floor(offset_ms / self.interval_ms))
