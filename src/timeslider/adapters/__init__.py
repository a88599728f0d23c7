"""Reference implementations of the view and source protocols."""

from src.timeslider.adapters.layers import LayerList, TimeAwareLayer
from src.timeslider.adapters.view import InMemoryTemporalView

__all__ = ["InMemoryTemporalView", "LayerList", "TimeAwareLayer"]
