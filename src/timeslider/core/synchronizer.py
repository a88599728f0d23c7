"""
Selection synchronizer between step indices and a view's displayed extent.

View -> controller: step indices are derived from the view's current extent.
Controller -> view: step indices are turned into an extent, written to the
view, and the indices are derived again from what the view accepted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from src.domain.interfaces import TemporalView
from src.domain.time import TimeExtent
from src.timeslider.core.step_model import StepModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """Selected step range. Indices are not clamped to the step range."""

    start_step: int = 0
    end_step: int = 0


class SelectionSynchronizer:
    """
    Keeps a step selection consistent with a view's displayed extent.

    The view is the source of truth for the current extent. Every mutation
    ends by reading the view back, so a view that clamps or rejects a
    proposal still leaves indices and display in agreement.
    """

    def __init__(self, view: TemporalView | None = None):
        self.view = view

    def displayed_extent(self, model: StepModel) -> TimeExtent:
        """
        The extent to treat as displayed.

        Falls back to the full extent when there is no view or the view's
        extent is empty.
        """
        extent = self.view.get_current_extent() if self.view is not None else None
        if extent is None or extent.is_empty:
            return model.full_extent
        return extent

    def selection_for(self, model: StepModel, extent: TimeExtent | None = None) -> Selection | None:
        """
        Step indices covering ``extent`` (the displayed extent by default).

        Returns None when the model is empty.
        """
        if model.is_empty:
            return None
        if extent is None or extent.is_empty:
            extent = self.displayed_extent(model)
        start_step = model.index_at(extent.start)
        end_step = model.index_at(extent.end)
        return Selection(start_step=start_step, end_step=end_step)

    def propose(
        self,
        model: StepModel,
        start_step: int | None = None,
        end_step: int | None = None,
    ) -> bool:
        """
        Write an extent built from step indices to the view.

        A bound passed as None is kept at the view's current value. The
        bounds are not reordered; the view decides what to do with a
        reversed proposal.

        Returns
        -------
        bool
            False if nothing was written (empty model or no view)
        """
        if model.is_empty or self.view is None:
            return False

        current = self.displayed_extent(model)
        new_start = model.time_at(start_step) if start_step is not None else current.start
        new_end = model.time_at(end_step) if end_step is not None else current.end

        if new_start <= new_end:
            proposal = TimeExtent(new_start, new_end)
        else:
            proposal = TimeExtent.unchecked(new_start, new_end)

        logger.debug(f"Proposing extent {proposal} (steps {start_step}..{end_step})")
        self.view.set_current_extent(proposal)
        return True
