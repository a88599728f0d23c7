"""Domain interfaces (protocols) for dependency inversion.

This module defines the collaborator protocols of the time slider:
- TimeAwareSource: a data source (layer) with a temporal extent
- SourceCollection: the observable set of sources shown by a view
- TemporalView: the host view that owns the current time extent

The controller depends only on these protocols; concrete map or scene
views are wrapped by adapters implementing them.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from src.domain.time import TimeExtent, TimeValue


# ============================================================================
# Source Load State
# ============================================================================


class LoadStatus(Enum):
    """Load states of a data source."""

    NOT_LOADED = auto()
    LOADING = auto()
    LOADED = auto()
    FAILED_TO_LOAD = auto()

    @property
    def is_settled(self) -> bool:
        """Whether loading has finished, successfully or not."""
        return self in (LoadStatus.LOADED, LoadStatus.FAILED_TO_LOAD)


# ============================================================================
# Source Protocols
# ============================================================================


@runtime_checkable
class TimeAwareSource(Protocol):
    """Protocol for data sources participating in time filtering."""

    @property
    def name(self) -> str:
        """Display name, used for logging."""
        ...

    @property
    def load_status(self) -> LoadStatus:
        ...

    @property
    def is_visible(self) -> bool:
        ...

    @property
    def is_time_filtering_enabled(self) -> bool:
        ...

    @property
    def full_time_extent(self) -> TimeExtent:
        """Temporal extent of the data, or the empty extent."""
        ...

    @property
    def time_interval(self) -> TimeValue | None:
        """Preferred step interval, or None if unspecified."""
        ...

    def on_done_loading(self, callback: Callable[[TimeAwareSource], None]) -> None:
        """Register a one-shot callback fired when the source settles.

        The callback receives the source. It is called once, after the
        load status becomes LOADED or FAILED_TO_LOAD.
        """
        ...


@runtime_checkable
class SourceCollection(Protocol):
    """Protocol for the observable list of sources displayed by a view.

    Listeners are called with no arguments whenever a source is added or
    removed, or a member's visibility or time-filtering flag changes.
    """

    def __iter__(self) -> Iterator[TimeAwareSource]:
        ...

    def __len__(self) -> int:
        ...

    def add_listener(self, callback: Callable[[], None]) -> None:
        ...

    def remove_listener(self, callback: Callable[[], None]) -> bool:
        ...


# ============================================================================
# View Protocol
# ============================================================================


@runtime_checkable
class TemporalView(Protocol):
    """Capability interface of a host view displaying a time extent.

    Implementations notify extent listeners whenever the displayed extent
    changes, including changes written through :meth:`set_current_extent`.
    """

    def get_current_extent(self) -> TimeExtent:
        """Currently displayed extent, or the empty extent if unset."""
        ...

    def set_current_extent(self, extent: TimeExtent) -> None:
        """Propose a new extent. The view may clamp or reject it."""
        ...

    def add_extent_listener(self, callback: Callable[[TimeExtent], None]) -> None:
        ...

    def remove_extent_listener(self, callback: Callable[[TimeExtent], None]) -> bool:
        ...

    def get_sources(self) -> SourceCollection | None:
        """Sources shown by the view (its operational layers), if any."""
        ...

    def add_sources_listener(self, callback: Callable[[], None]) -> None:
        """Register a callback fired when the view swaps its source collection."""
        ...

    def remove_sources_listener(self, callback: Callable[[], None]) -> bool:
        ...
