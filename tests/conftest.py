"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from src.domain.interfaces import LoadStatus
from src.domain.time import TimeExtent, TimeValue
from src.timeslider.adapters import InMemoryTemporalView, LayerList, TimeAwareLayer
from src.timeslider.core.controller import TimeSliderController


BASE_TIME = datetime(2020, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def day():
    """Timestamp factory: ``day(n)`` is n days after 2020-01-01 UTC."""

    def _day(n: float) -> datetime:
        return BASE_TIME + timedelta(days=n)

    return _day


@pytest.fixture
def extent(day):
    """Extent factory over day offsets: ``extent(0, 10)``."""

    def _extent(start_day: float, end_day: float) -> TimeExtent:
        return TimeExtent(day(start_day), day(end_day))

    return _extent


@pytest.fixture
def make_layer(extent):
    """Layer factory over day offsets."""

    def _make_layer(
        name: str = "layer",
        start_day: float | None = 0,
        end_day: float | None = 10,
        interval: TimeValue | None = None,
        status: LoadStatus = LoadStatus.LOADED,
        visible: bool = True,
        time_filtering: bool = True,
    ) -> TimeAwareLayer:
        layer_extent = (
            extent(start_day, end_day) if start_day is not None else TimeExtent.empty()
        )
        return TimeAwareLayer(
            name,
            full_time_extent=layer_extent,
            time_interval=interval,
            load_status=status,
            visible=visible,
            time_filtering_enabled=time_filtering,
        )

    return _make_layer


@pytest.fixture
def ten_day_layer(make_layer):
    """Layer spanning 2020-01-01 .. 2020-01-11."""
    return make_layer("ten-days", 0, 10)


@pytest.fixture
def layers(ten_day_layer):
    return LayerList([ten_day_layer])


@pytest.fixture
def view(layers):
    return InMemoryTemporalView(sources=layers)


@pytest.fixture
def controller(view):
    controller = TimeSliderController(view)
    yield controller
    controller.close()


@pytest.fixture
def recording_view():
    """View double that records proposals and accepts them verbatim."""

    class _RecordingView:
        def __init__(self) -> None:
            self.extent = TimeExtent.empty()
            self.proposals: list[TimeExtent] = []

        def get_current_extent(self) -> TimeExtent:
            return self.extent

        def set_current_extent(self, extent: TimeExtent) -> None:
            self.proposals.append(extent)
            self.extent = extent

        def add_extent_listener(self, callback) -> None:
            pass

        def remove_extent_listener(self, callback) -> bool:
            return False

        def get_sources(self):
            return None

        def add_sources_listener(self, callback) -> None:
            pass

        def remove_sources_listener(self, callback) -> bool:
            return False

    return _RecordingView()
