"""
Time slider controller.

The controller presents the temporal range of a view's data as a number of
uniform steps, and keeps a selected step range in sync with the view's
displayed time extent. It is constructed explicitly and handed to whatever
owns the slider UI; listeners observe it through ``controller.events``.

Example
-------
>>> controller = TimeSliderController(view)
>>> controller.events.subscribe(EventType.START_STEP_CHANGED, on_start_changed)
>>> controller.number_of_steps  # 11
>>> controller.set_start_and_end_steps(2, 5)
"""

from __future__ import annotations

import logging
from datetime import datetime

import numpy as np

from src.domain.interfaces import SourceCollection, TemporalView
from src.domain.time import TimeExtent, TimeValue
from src.timeslider.config.settings import TimeSliderConfig
from src.timeslider.core.aggregator import AggregateResult, ExtentAggregator
from src.timeslider.core.step_model import StepModel
from src.timeslider.core.synchronizer import Selection, SelectionSynchronizer
from src.timeslider.interaction.events import EventBus, EventType

logger = logging.getLogger(__name__)


class TimeSliderController:
    """
    Controller for a time slider tool.

    Handles:
    - Full extent / interval aggregation over the view's sources
    - Step count and step times
    - Start/end step selection synchronized with the view

    All recomputation runs inside a deferred block of the event bus, so
    listeners are only notified once the aggregate, step model and
    selection are all up to date.
    """

    def __init__(
        self,
        view: TemporalView | None = None,
        config: TimeSliderConfig | None = None,
    ):
        """
        Initialize the controller.

        Parameters
        ----------
        view : TemporalView | None
            Host view to attach; can be set later with :meth:`set_view`
        config : TimeSliderConfig | None
            Settings; defaults are used if None
        """
        self.config = config or TimeSliderConfig()
        self.events = EventBus(
            name=self.config.tool_name, max_history=self.config.event_history_size
        )

        self._aggregator = ExtentAggregator(on_source_settled=self.refresh)
        self._synchronizer = SelectionSynchronizer()
        self._view: TemporalView | None = None
        self._sources: SourceCollection | None = None

        self._aggregate = AggregateResult()
        self._model = StepModel()
        self._selection = Selection()
        self._current_extent = TimeExtent.empty()

        if view is not None:
            self.set_view(view)

        logger.debug(f"{self.tool_name} controller initialized")

    # =========================================================================
    # Attributes
    # =========================================================================

    @property
    def tool_name(self) -> str:
        return self.config.tool_name

    @property
    def view(self) -> TemporalView | None:
        return self._view

    @property
    def full_extent(self) -> TimeExtent:
        """Union of the extents of the participating sources."""
        return self._model.full_extent

    @property
    def full_extent_start(self) -> datetime | None:
        return self._model.full_extent.start

    @property
    def full_extent_end(self) -> datetime | None:
        return self._model.full_extent.end

    @property
    def current_extent(self) -> TimeExtent:
        """The view's extent, or the full extent if the view has none."""
        return self._synchronizer.displayed_extent(self._model)

    @property
    def current_extent_start(self) -> datetime | None:
        return self.current_extent.start

    @property
    def current_extent_end(self) -> datetime | None:
        return self.current_extent.end

    @property
    def number_of_steps(self) -> int:
        """Total number of steps required to cover the full extent."""
        return self._model.number_of_steps

    @property
    def step_times(self) -> list[datetime]:
        return self._model.step_times

    @property
    def step_interval(self) -> TimeValue | None:
        return self._model.interval

    @property
    def interval_ms(self) -> float:
        return self._model.interval_ms

    @property
    def start_step(self) -> int:
        return self._selection.start_step

    @property
    def end_step(self) -> int:
        return self._selection.end_step

    @property
    def participants(self) -> tuple[str, ...]:
        """Names of the sources in the last aggregation."""
        return self._aggregate.participants

    # =========================================================================
    # View Binding
    # =========================================================================

    def set_view(self, view: TemporalView | None) -> None:
        """
        Attach the controller to ``view`` (or detach with None).

        Listeners on the previous view and its sources are removed.
        """
        if view is self._view:
            return

        with self.events.deferred():
            if self._view is not None:
                self._view.remove_extent_listener(self._on_view_extent_changed)
                self._view.remove_sources_listener(self._on_view_sources_changed)

            self._view = view
            self._synchronizer.view = view

            if view is not None:
                view.add_extent_listener(self._on_view_extent_changed)
                view.add_sources_listener(self._on_view_sources_changed)
                logger.info(f"{self.tool_name} attached to view {type(view).__name__}")
            else:
                logger.info(f"{self.tool_name} detached from view")

            self._bind_sources(view.get_sources() if view is not None else None)
            self.refresh()

    def close(self) -> None:
        """Detach from the view and drop pending load subscriptions."""
        self.set_view(None)
        self._aggregator.reset()

    def _bind_sources(self, sources: SourceCollection | None) -> None:
        if sources is self._sources:
            return
        if self._sources is not None:
            self._sources.remove_listener(self._on_sources_changed)
        self._aggregator.reset()
        self._sources = sources
        if sources is not None:
            sources.add_listener(self._on_sources_changed)

    # =========================================================================
    # Recomputation
    # =========================================================================

    def refresh(self) -> None:
        """Recompute full extent, steps and selection from the current sources."""
        with self.events.deferred():
            aggregate = self._aggregator.aggregate(self._sources)
            model = StepModel.build(
                aggregate.full_extent,
                aggregate.interval,
                min_interval_ms=self.config.min_interval_ms,
            )
            self._aggregate = aggregate
            self._publish_model(model)
            self._sync_selection()

    def _publish_model(self, model: StepModel) -> None:
        previous = self._model
        self._model = model

        if model.full_extent != previous.full_extent:
            logger.info(
                f"{self.tool_name} full extent {model.full_extent}, "
                f"interval {model.interval}, {model.number_of_steps} steps"
            )
            self.events.emit(
                EventType.FULL_EXTENT_CHANGED, source=self.tool_name, extent=model.full_extent
            )
        if model.number_of_steps != previous.number_of_steps:
            self.events.emit(
                EventType.NUMBER_OF_STEPS_CHANGED,
                source=self.tool_name,
                number_of_steps=model.number_of_steps,
            )
        if not np.array_equal(model.step_times_ms, previous.step_times_ms):
            self.events.emit(
                EventType.STEP_TIMES_CHANGED, source=self.tool_name, step_times=model.step_times
            )

    def _sync_selection(self) -> None:
        """Derive step indices from the displayed extent and publish them."""
        with self.events.deferred():
            model = self._model
            selection = self._synchronizer.selection_for(model) or Selection()
            current_extent = self._synchronizer.displayed_extent(model)

            previous_selection = self._selection
            previous_extent = self._current_extent
            self._selection = selection
            self._current_extent = current_extent

            if selection.start_step != previous_selection.start_step:
                self.events.emit(
                    EventType.START_STEP_CHANGED,
                    source=self.tool_name,
                    start_step=selection.start_step,
                )
            if selection.end_step != previous_selection.end_step:
                self.events.emit(
                    EventType.END_STEP_CHANGED, source=self.tool_name, end_step=selection.end_step
                )
            if current_extent != previous_extent:
                self.events.emit(
                    EventType.CURRENT_EXTENT_CHANGED, source=self.tool_name, extent=current_extent
                )

    # =========================================================================
    # Step Mutators
    # =========================================================================

    def set_start_step(self, index: int) -> None:
        """
        Move the start of the current extent to step ``index``.

        The end is kept. No-op when there are no steps.
        """
        self._propose(start_step=index)

    def set_end_step(self, index: int) -> None:
        """
        Move the end of the current extent to step ``index``.

        The start is kept. No-op when there are no steps.
        """
        self._propose(end_step=index)

    def set_start_and_end_steps(self, start_index: int, end_index: int) -> None:
        """Move both bounds of the current extent in a single view update."""
        self._propose(start_step=start_index, end_step=end_index)

    def _propose(self, start_step: int | None = None, end_step: int | None = None) -> None:
        if self._model.is_empty:
            logger.debug(f"{self.tool_name} has no steps, ignoring step change")
            return
        with self.events.deferred():
            self._synchronizer.propose(self._model, start_step=start_step, end_step=end_step)
            # The view may have clamped the proposal; read back what it shows
            self._sync_selection()

    # =========================================================================
    # Collaborator Notifications
    # =========================================================================

    def _on_view_extent_changed(self, extent: TimeExtent) -> None:
        self._sync_selection()

    def _on_sources_changed(self) -> None:
        self.refresh()

    def _on_view_sources_changed(self) -> None:
        with self.events.deferred():
            self._bind_sources(self._view.get_sources() if self._view is not None else None)
            self.refresh()
