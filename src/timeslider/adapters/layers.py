"""
Reference time-aware layer and observable layer list.

These implement the TimeAwareSource and SourceCollection protocols for hosts
without their own layer model, and for tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from src.domain.interfaces import LoadStatus
from src.domain.time import TimeExtent, TimeValue

logger = logging.getLogger(__name__)


class TimeAwareLayer:
    """
    A data layer with a temporal extent and a load lifecycle.

    Parameters
    ----------
    name : str
        Display name
    full_time_extent : TimeExtent | None
        Extent of the layer's data (empty if None)
    time_interval : TimeValue | None
        Preferred step interval, None if unspecified
    load_status : LoadStatus
        Initial load status (LOADED by default)
    visible : bool
        Whether the layer is shown
    time_filtering_enabled : bool
        Whether the layer takes part in time filtering
    """

    def __init__(
        self,
        name: str,
        full_time_extent: TimeExtent | None = None,
        time_interval: TimeValue | None = None,
        load_status: LoadStatus = LoadStatus.LOADED,
        visible: bool = True,
        time_filtering_enabled: bool = True,
    ):
        self._name = name
        self._extent = full_time_extent or TimeExtent.empty()
        self._interval = time_interval
        self._status = load_status
        self._visible = visible
        self._time_filtering_enabled = time_filtering_enabled
        self._done_loading: list[Callable[[TimeAwareLayer], None]] = []
        self._change_listeners: list[Callable[[TimeAwareLayer], None]] = []

    def __repr__(self) -> str:
        return f"TimeAwareLayer({self._name!r}, {self._status.name}, extent={self._extent})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def load_status(self) -> LoadStatus:
        return self._status

    @property
    def is_visible(self) -> bool:
        return self._visible

    @property
    def is_time_filtering_enabled(self) -> bool:
        return self._time_filtering_enabled

    @property
    def full_time_extent(self) -> TimeExtent:
        return self._extent

    @property
    def time_interval(self) -> TimeValue | None:
        return self._interval

    # --- Load lifecycle ---

    def on_done_loading(self, callback: Callable[[TimeAwareLayer], None]) -> None:
        """Register a one-shot callback for when loading settles."""
        if self._status.is_settled:
            logger.debug(f"Layer '{self._name}' already settled, callback not queued")
            return
        self._done_loading.append(callback)

    def begin_loading(self) -> None:
        if self._status.is_settled:
            return
        self._status = LoadStatus.LOADING

    def finish_loading(
        self,
        full_time_extent: TimeExtent | None = None,
        time_interval: TimeValue | None = None,
    ) -> None:
        """Mark the layer loaded, optionally with the extent/interval read from its data."""
        if full_time_extent is not None:
            self._extent = full_time_extent
        if time_interval is not None:
            self._interval = time_interval
        self._settle(LoadStatus.LOADED)

    def fail_loading(self, reason: str = "") -> None:
        logger.warning(f"Layer '{self._name}' failed to load{': ' + reason if reason else ''}")
        self._settle(LoadStatus.FAILED_TO_LOAD)

    def _settle(self, status: LoadStatus) -> None:
        self._status = status
        callbacks, self._done_loading = self._done_loading, []
        for callback in callbacks:
            callback(self)

    # --- Property changes ---

    def add_change_listener(self, callback: Callable[[TimeAwareLayer], None]) -> None:
        self._change_listeners.append(callback)

    def remove_change_listener(self, callback: Callable[[TimeAwareLayer], None]) -> bool:
        if callback in self._change_listeners:
            self._change_listeners.remove(callback)
            return True
        return False

    def set_visible(self, visible: bool) -> None:
        if visible != self._visible:
            self._visible = visible
            self._notify_changed()

    def set_time_filtering_enabled(self, enabled: bool) -> None:
        if enabled != self._time_filtering_enabled:
            self._time_filtering_enabled = enabled
            self._notify_changed()

    def _notify_changed(self) -> None:
        for callback in list(self._change_listeners):
            callback(self)


class LayerList:
    """
    Observable list of layers.

    Listeners are called (without arguments) after a layer is added or
    removed, and when a member layer toggles visibility or time filtering.
    """

    def __init__(self, layers: Iterable[TimeAwareLayer] = ()):
        self._layers: list[TimeAwareLayer] = []
        self._listeners: list[Callable[[], None]] = []
        for layer in layers:
            self._watch(layer)
            self._layers.append(layer)

    def __iter__(self) -> Iterator[TimeAwareLayer]:
        return iter(list(self._layers))

    def __len__(self) -> int:
        return len(self._layers)

    def __getitem__(self, index: int) -> TimeAwareLayer:
        return self._layers[index]

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> bool:
        if callback in self._listeners:
            self._listeners.remove(callback)
            return True
        return False

    def append(self, layer: TimeAwareLayer) -> None:
        self.insert(len(self._layers), layer)

    def insert(self, index: int, layer: TimeAwareLayer) -> None:
        self._watch(layer)
        self._layers.insert(index, layer)
        logger.debug(f"Layer added: {layer.name}")
        self._notify()

    def remove(self, layer: TimeAwareLayer) -> None:
        self._layers.remove(layer)
        self._unwatch(layer)
        logger.debug(f"Layer removed: {layer.name}")
        self._notify()

    def clear(self) -> None:
        if not self._layers:
            return
        for layer in self._layers:
            self._unwatch(layer)
        self._layers.clear()
        self._notify()

    def _watch(self, layer: TimeAwareLayer) -> None:
        if hasattr(layer, "add_change_listener"):
            layer.add_change_listener(self._on_layer_changed)

    def _unwatch(self, layer: TimeAwareLayer) -> None:
        if hasattr(layer, "remove_change_listener"):
            layer.remove_change_listener(self._on_layer_changed)

    def _on_layer_changed(self, layer: TimeAwareLayer) -> None:
        self._notify()

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()
