"""Tests for ExtentAggregator."""

from src.domain.interfaces import LoadStatus
from src.domain.time import TimeValue
from src.timeslider.core.aggregator import ExtentAggregator, coarsest_interval


class TestCoarsestInterval:
    def test_ignores_unspecified(self):
        assert coarsest_interval([None, TimeValue.hours(6), None]) == TimeValue.hours(6)

    def test_all_unspecified(self):
        assert coarsest_interval([None, None]) is None
        assert coarsest_interval([]) is None


class TestExtentAggregator:
    """Test filtering and union of sources."""

    def test_two_sources_union(self, make_layer, extent):
        aggregator = ExtentAggregator()
        result = aggregator.aggregate([make_layer("a", 0, 5), make_layer("b", 2, 8)])

        assert result.full_extent == extent(0, 8)
        assert result.participants == ("a", "b")

    def test_coarsest_interval_wins(self, make_layer):
        aggregator = ExtentAggregator()
        result = aggregator.aggregate(
            [
                make_layer("a", interval=TimeValue.hours(6)),
                make_layer("b", interval=TimeValue.days(1)),
                make_layer("c"),
            ]
        )
        assert result.interval == TimeValue.days(1)

    def test_no_sources(self):
        aggregator = ExtentAggregator()
        assert aggregator.aggregate([]).full_extent.is_empty
        assert aggregator.aggregate(None).full_extent.is_empty
        assert aggregator.aggregate([]).interval is None

    def test_hidden_and_unfiltered_excluded(self, make_layer, extent):
        aggregator = ExtentAggregator()
        result = aggregator.aggregate(
            [
                make_layer("shown", 2, 3),
                make_layer("hidden", 0, 10, visible=False),
                make_layer("static", 0, 10, time_filtering=False),
            ]
        )
        assert result.full_extent == extent(2, 3)
        assert result.participants == ("shown",)

    def test_layer_without_extent_contributes_nothing(self, make_layer, extent):
        aggregator = ExtentAggregator()
        result = aggregator.aggregate([make_layer("empty", None), make_layer("a", 1, 2)])
        assert result.full_extent == extent(1, 2)

    def test_non_time_aware_entries_skipped(self, make_layer, extent):
        aggregator = ExtentAggregator()
        result = aggregator.aggregate([object(), None, make_layer("a", 1, 2)])
        assert result.full_extent == extent(1, 2)

    def test_failed_source_excluded_and_not_awaited(self, make_layer):
        aggregator = ExtentAggregator()
        result = aggregator.aggregate([make_layer("broken", status=LoadStatus.FAILED_TO_LOAD)])

        assert result.full_extent.is_empty
        assert result.pending == ()
        assert aggregator.awaiting == []

    def test_pending_source_triggers_reaggregation(self, make_layer, extent):
        calls = []
        aggregator = ExtentAggregator(on_source_settled=lambda: calls.append(True))
        pending = make_layer("slow", status=LoadStatus.LOADING)

        result = aggregator.aggregate([pending])
        assert result.pending == ("slow",)
        assert result.full_extent.is_empty

        pending.finish_loading(extent(3, 4))
        assert calls == [True]
        assert aggregator.aggregate([pending]).full_extent == extent(3, 4)

    def test_pending_source_subscribed_once(self, make_layer):
        calls = []
        aggregator = ExtentAggregator(on_source_settled=lambda: calls.append(True))
        pending = make_layer("slow", status=LoadStatus.NOT_LOADED)

        aggregator.aggregate([pending])
        aggregator.aggregate([pending])
        assert len(aggregator.awaiting) == 1

        pending.fail_loading("timeout")
        assert calls == [True]
        assert aggregator.awaiting == []

    def test_reset_drops_subscriptions(self, make_layer):
        calls = []
        aggregator = ExtentAggregator(on_source_settled=lambda: calls.append(True))
        pending = make_layer("slow", status=LoadStatus.LOADING)

        aggregator.aggregate([pending])
        aggregator.reset()
        pending.finish_loading()

        assert calls == []
