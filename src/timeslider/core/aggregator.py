"""
Extent aggregation over the time-aware sources of a view.

The aggregator filters the sources down to those participating in time
filtering and unions their extents and preferred intervals into one
authoritative full extent and step interval.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from src.domain.interfaces import LoadStatus, TimeAwareSource
from src.domain.time import TimeExtent, TimeValue, union_time_extents

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateResult:
    """Outcome of one aggregation pass.

    Attributes
    ----------
    full_extent : TimeExtent
        Union of the participating extents (empty if none)
    interval : TimeValue | None
        Coarsest interval requested by a participant, None if unspecified
    participants : tuple[str, ...]
        Names of the sources that took part
    pending : tuple[str, ...]
        Names of the sources still loading
    """

    full_extent: TimeExtent = field(default_factory=TimeExtent.empty)
    interval: TimeValue | None = None
    participants: tuple[str, ...] = ()
    pending: tuple[str, ...] = ()


def coarsest_interval(intervals: Iterable[TimeValue | None]) -> TimeValue | None:
    """Largest of the given intervals, ignoring unspecified ones."""
    result: TimeValue | None = None
    for interval in intervals:
        if interval is None:
            continue
        if result is None or interval > result:
            result = interval
    return result


class ExtentAggregator:
    """
    Computes the full extent and step interval of a set of sources.

    Sources that have not settled yet are skipped, and a one-shot
    load-completion subscription is placed on each of them (at most one per
    source). When such a source settles, ``on_source_settled`` is invoked so
    the owner can re-run the aggregation.
    """

    def __init__(self, on_source_settled: Callable[[], None] | None = None):
        """
        Initialize the aggregator.

        Parameters
        ----------
        on_source_settled : Callable[[], None] | None
            Called when a previously pending source finishes loading
        """
        self._on_source_settled = on_source_settled
        self._awaiting: dict[int, TimeAwareSource] = {}

    @property
    def awaiting(self) -> list[TimeAwareSource]:
        """Sources with an outstanding load-completion subscription."""
        return list(self._awaiting.values())

    def aggregate(self, sources: Iterable[object] | None) -> AggregateResult:
        """
        Union the extents and intervals of the eligible sources.

        Parameters
        ----------
        sources : Iterable[object] | None
            Current sources; entries not implementing TimeAwareSource are skipped

        Returns
        -------
        AggregateResult
            Empty extent and no interval when no source is eligible
        """
        if sources is None:
            return AggregateResult()

        full_extent = TimeExtent.empty()
        intervals: list[TimeValue | None] = []
        participants: list[str] = []
        pending: list[str] = []

        for source in sources:
            if source is None or not isinstance(source, TimeAwareSource):
                continue

            status = source.load_status
            if not status.is_settled:
                pending.append(source.name)
                self._await(source)
                continue

            if status is LoadStatus.FAILED_TO_LOAD:
                logger.warning(f"Source '{source.name}' failed to load, excluded from time extent")
                continue

            if not source.is_time_filtering_enabled or not source.is_visible:
                continue

            participants.append(source.name)
            full_extent = union_time_extents(full_extent, source.full_time_extent)
            intervals.append(source.time_interval)

        result = AggregateResult(
            full_extent=full_extent,
            interval=coarsest_interval(intervals),
            participants=tuple(participants),
            pending=tuple(pending),
        )
        logger.debug(
            f"Aggregated {len(participants)} sources ({len(pending)} pending): "
            f"extent={result.full_extent}, interval={result.interval}"
        )
        return result

    def reset(self) -> None:
        """Forget outstanding subscriptions (their callbacks become no-ops)."""
        self._awaiting.clear()

    def _await(self, source: TimeAwareSource) -> None:
        key = id(source)
        if key in self._awaiting:
            return
        self._awaiting[key] = source
        logger.debug(f"Waiting for source '{source.name}' to finish loading")
        source.on_done_loading(self._handle_done_loading)

    def _handle_done_loading(self, source: TimeAwareSource) -> None:
        if self._awaiting.pop(id(source), None) is None:
            return
        logger.debug(f"Source '{source.name}' settled with status {source.load_status.name}")
        if self._on_source_settled is not None:
            self._on_source_settled()
