"""Time domain abstraction for temporal extents and step intervals.

This module provides the value types the time slider works with:
units of time, durations expressed in a unit, and absolute extents.

Example
-------
>>> # Durations compare across units
>>> TimeValue(1.0, TimeUnit.DAYS) > TimeValue(23.0, TimeUnit.HOURS)  # True

>>> # Extents union, with the empty extent as identity
>>> a = TimeExtent(datetime(2020, 1, 1), datetime(2020, 1, 5))
>>> a.union(TimeExtent.empty()) == a  # True
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum


MILLISECONDS_PER_SECOND = 1000.0
MILLISECONDS_PER_MINUTE = 60000.0
MILLISECONDS_PER_HOUR = 3600000.0
MILLISECONDS_PER_DAY = 86400000.0
MILLISECONDS_PER_WEEK = 604800000.0
DAYS_PER_YEAR = 365.0
DAYS_PER_DECADE = 3650.0
DAYS_PER_CENTURY = 36500.0
MONTHS_PER_YEAR = 12

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class TimeUnit(Enum):
    """Units of time, ordered from finest to coarsest."""

    MILLISECONDS = 1.0
    SECONDS = MILLISECONDS_PER_SECOND
    MINUTES = MILLISECONDS_PER_MINUTE
    HOURS = MILLISECONDS_PER_HOUR
    DAYS = MILLISECONDS_PER_DAY
    WEEKS = MILLISECONDS_PER_WEEK
    MONTHS = DAYS_PER_YEAR * MILLISECONDS_PER_DAY / MONTHS_PER_YEAR
    YEARS = DAYS_PER_YEAR * MILLISECONDS_PER_DAY
    DECADES = DAYS_PER_DECADE * MILLISECONDS_PER_DAY
    CENTURIES = DAYS_PER_CENTURY * MILLISECONDS_PER_DAY

    @property
    def milliseconds(self) -> float:
        """Length of one unit in milliseconds."""
        return self.value

    @classmethod
    def from_name(cls, name: str) -> TimeUnit:
        """Look up a unit by case-insensitive name ("days", "Hours", ...)."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(unit.name.lower() for unit in cls)
            raise ValueError(f"Unknown time unit '{name}' (valid: {valid})") from None


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class TimeValue:
    """A signed duration expressed in a single unit.

    Attributes
    ----------
    duration : float
        Magnitude in ``unit``
    unit : TimeUnit
        Unit the magnitude is expressed in
    """

    duration: float
    unit: TimeUnit

    def to_milliseconds(self) -> float:
        """Duration normalized to milliseconds."""
        return self.duration * self.unit.milliseconds

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeValue):
            return NotImplemented
        # Same unit compares magnitudes to avoid conversion rounding
        if self.unit is other.unit:
            return self.duration == other.duration
        return self.to_milliseconds() == other.to_milliseconds()

    def __lt__(self, other: TimeValue) -> bool:
        if not isinstance(other, TimeValue):
            return NotImplemented
        if self.unit is other.unit:
            return self.duration < other.duration
        return self.to_milliseconds() < other.to_milliseconds()

    def __hash__(self) -> int:
        return hash(self.to_milliseconds())

    def __str__(self) -> str:
        return f"{self.duration:g} {self.unit.name.lower()}"

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def milliseconds(cls, duration: float) -> TimeValue:
        return cls(duration, TimeUnit.MILLISECONDS)

    @classmethod
    def seconds(cls, duration: float) -> TimeValue:
        return cls(duration, TimeUnit.SECONDS)

    @classmethod
    def minutes(cls, duration: float) -> TimeValue:
        return cls(duration, TimeUnit.MINUTES)

    @classmethod
    def hours(cls, duration: float) -> TimeValue:
        return cls(duration, TimeUnit.HOURS)

    @classmethod
    def days(cls, duration: float) -> TimeValue:
        return cls(duration, TimeUnit.DAYS)

    @classmethod
    def years(cls, duration: float) -> TimeValue:
        return cls(duration, TimeUnit.YEARS)


def to_epoch_ms(timestamp: datetime) -> int:
    """Convert a timestamp to integer milliseconds since the Unix epoch.

    Naive datetimes are interpreted as UTC.
    """
    timestamp = _as_utc(timestamp)
    delta = timestamp - _EPOCH
    return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds // 1000


def from_epoch_ms(milliseconds: int | float) -> datetime:
    """Convert milliseconds since the Unix epoch to an aware UTC datetime."""
    return _EPOCH + timedelta(milliseconds=int(milliseconds))


def _as_utc(timestamp: datetime) -> datetime:
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp


@dataclass(frozen=True)
class TimeExtent:
    """An absolute time range, or the empty extent.

    The empty extent has both ends set to None and represents "no temporal
    data". A non-empty extent always has ``start <= end``; use
    :meth:`unchecked` to build a proposal whose order is left for a view to
    judge.

    Attributes
    ----------
    start : datetime | None
        Start of the range (aware, UTC for naive input)
    end : datetime | None
        End of the range (aware, UTC for naive input)
    """

    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        if (self.start is None) != (self.end is None):
            raise ValueError("TimeExtent needs both start and end, or neither")
        if self.start is None:
            return
        object.__setattr__(self, "start", _as_utc(self.start))
        object.__setattr__(self, "end", _as_utc(self.end))
        if self.start > self.end:
            raise ValueError(f"TimeExtent start {self.start} is after end {self.end}")

    @classmethod
    def empty(cls) -> TimeExtent:
        """The empty extent (union identity)."""
        return cls()

    @classmethod
    def unchecked(cls, start: datetime, end: datetime) -> TimeExtent:
        """Build an extent without enforcing ``start <= end``."""
        extent = cls.__new__(cls)
        object.__setattr__(extent, "start", _as_utc(start))
        object.__setattr__(extent, "end", _as_utc(end))
        return extent

    @classmethod
    def from_epoch_ms(cls, start_ms: int | float, end_ms: int | float) -> TimeExtent:
        return cls(from_epoch_ms(start_ms), from_epoch_ms(end_ms))

    @property
    def is_empty(self) -> bool:
        return self.start is None

    @property
    def start_ms(self) -> int | None:
        return None if self.start is None else to_epoch_ms(self.start)

    @property
    def end_ms(self) -> int | None:
        return None if self.end is None else to_epoch_ms(self.end)

    @property
    def duration_ms(self) -> int:
        """Span in milliseconds (0 for the empty extent)."""
        if self.is_empty:
            return 0
        return self.end_ms - self.start_ms

    def contains(self, timestamp: datetime) -> bool:
        if self.is_empty:
            return False
        return self.start <= _as_utc(timestamp) <= self.end

    def union(self, other: TimeExtent) -> TimeExtent:
        return union_time_extents(self, other)

    def __str__(self) -> str:
        if self.is_empty:
            return "[empty]"
        return f"[{self.start.isoformat()}, {self.end.isoformat()}]"


def union_time_extents(extent: TimeExtent, other: TimeExtent) -> TimeExtent:
    """Smallest extent covering both operands.

    The empty extent is the identity: unioning with it returns the other
    operand unchanged.
    """
    if other.is_empty:
        return extent
    if extent.is_empty:
        return other
    start = extent.start if extent.start < other.start else other.start
    end = extent.end if extent.end > other.end else other.end
    return TimeExtent(start, end)
