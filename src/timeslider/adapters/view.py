"""
In-memory host view implementing the TemporalView protocol.

Stands in for a map or scene view: it stores the displayed time extent,
optionally clamps proposals to bounds, and owns a swappable layer list.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from src.domain.interfaces import SourceCollection
from src.domain.time import TimeExtent

logger = logging.getLogger(__name__)


class InMemoryTemporalView:
    """
    Host view holding a current time extent.

    Parameters
    ----------
    sources : SourceCollection | None
        Layers shown by the view
    current_extent : TimeExtent | None
        Initially displayed extent (empty if None)
    bounds : TimeExtent | None
        If set, accepted extents are clamped into these bounds
    reject_reversed : bool
        If True, proposals with start after end are ignored; otherwise
        their bounds are swapped
    """

    def __init__(
        self,
        sources: SourceCollection | None = None,
        current_extent: TimeExtent | None = None,
        bounds: TimeExtent | None = None,
        reject_reversed: bool = False,
    ):
        self._sources = sources
        self._extent = current_extent or TimeExtent.empty()
        self.bounds = bounds
        self.reject_reversed = reject_reversed
        self._extent_listeners: list[Callable[[TimeExtent], None]] = []
        self._sources_listeners: list[Callable[[], None]] = []
        self.write_count = 0

    # --- Extent ---

    def get_current_extent(self) -> TimeExtent:
        return self._extent

    def set_current_extent(self, extent: TimeExtent) -> None:
        """Accept a proposed extent, applying the view's clamp policy."""
        self.write_count += 1
        accepted = self._accept(extent)
        if accepted is None:
            logger.debug(f"View rejected extent {extent}")
            return
        if accepted == self._extent:
            return
        self._extent = accepted
        for callback in list(self._extent_listeners):
            callback(accepted)

    def _accept(self, extent: TimeExtent) -> TimeExtent | None:
        if extent.is_empty:
            return extent

        start, end = extent.start, extent.end
        if start > end:
            if self.reject_reversed:
                return None
            start, end = end, start

        if self.bounds is not None and not self.bounds.is_empty:
            start = min(max(start, self.bounds.start), self.bounds.end)
            end = min(max(end, self.bounds.start), self.bounds.end)

        return TimeExtent(start, end)

    def add_extent_listener(self, callback: Callable[[TimeExtent], None]) -> None:
        self._extent_listeners.append(callback)

    def remove_extent_listener(self, callback: Callable[[TimeExtent], None]) -> bool:
        if callback in self._extent_listeners:
            self._extent_listeners.remove(callback)
            return True
        return False

    # --- Sources ---

    def get_sources(self) -> SourceCollection | None:
        return self._sources

    def set_sources(self, sources: SourceCollection | None) -> None:
        """Swap the layer collection (e.g. a new map was loaded)."""
        if sources is self._sources:
            return
        self._sources = sources
        for callback in list(self._sources_listeners):
            callback()

    def add_sources_listener(self, callback: Callable[[], None]) -> None:
        self._sources_listeners.append(callback)

    def remove_sources_listener(self, callback: Callable[[], None]) -> bool:
        if callback in self._sources_listeners:
            self._sources_listeners.remove(callback)
            return True
        return False
