"""Tests for the step model and interval inference."""

from datetime import timedelta

import numpy as np
import pytest

from src.domain.time import MILLISECONDS_PER_DAY, TimeExtent, TimeUnit, TimeValue, from_epoch_ms
from src.timeslider.core.step_model import StepModel, estimate_time_unit, infer_step_interval


YEAR_MS = 365 * MILLISECONDS_PER_DAY


class TestEstimateTimeUnit:
    """Test the interval inference ladder."""

    @pytest.mark.parametrize(
        "range_ms, expected",
        [
            (0, TimeUnit.SECONDS),
            (30_000, TimeUnit.SECONDS),
            (59_999, TimeUnit.SECONDS),
            (60_000, TimeUnit.MINUTES),
            (1_800_000, TimeUnit.MINUTES),
            (3_600_000, TimeUnit.HOURS),
            (82_800_000, TimeUnit.HOURS),
            (90_000_000, TimeUnit.DAYS),
            (40 * MILLISECONDS_PER_DAY, TimeUnit.DAYS),
            (5 * YEAR_MS, TimeUnit.YEARS),
            (100 * YEAR_MS, TimeUnit.YEARS),
            (150 * YEAR_MS, TimeUnit.CENTURIES),
        ],
    )
    def test_ladder(self, range_ms, expected):
        assert estimate_time_unit(range_ms) is expected

    def test_no_decade_tier(self):
        """Spans of a few decades still step by years."""
        assert estimate_time_unit(30 * YEAR_MS) is TimeUnit.YEARS

    def test_infer_step_interval(self, extent):
        assert infer_step_interval(extent(0, 10)) == TimeValue.days(1)


class TestStepModel:
    """Test StepModel construction and index conversion."""

    def test_ten_day_extent(self, extent, day):
        """[2020-01-01, 2020-01-11] with an inferred daily step has 11 steps."""
        model = StepModel.build(extent(0, 10))

        assert model.interval == TimeValue.days(1)
        assert model.number_of_steps == 11
        assert model.step_times[0] == day(0)
        assert model.step_times[10] == day(10)

    def test_explicit_interval(self, extent):
        model = StepModel.build(extent(0, 1), TimeValue.hours(6))
        assert model.number_of_steps == 5
        assert model.interval_ms == 6 * 3_600_000

    def test_uneven_division(self):
        model = StepModel.build(TimeExtent.from_epoch_ms(0, 2500), TimeValue.seconds(1))
        assert model.number_of_steps == 3
        assert model.step_times_ms.tolist() == [0, 1000, 2000]

    def test_step_times_non_decreasing(self, extent):
        model = StepModel.build(extent(0, 400), TimeValue(1, TimeUnit.WEEKS))
        assert np.all(np.diff(model.step_times_ms) >= 0)
        assert model.step_times_ms[0] == extent(0, 400).start_ms
        assert len(model.step_times) == model.number_of_steps

    def test_empty_extent(self, day):
        model = StepModel.build(TimeExtent.empty())

        assert model.is_empty
        assert model.number_of_steps == 0
        assert model.step_times == []
        assert model.time_at(3) is None
        assert model.index_at(day(1)) is None

    def test_zero_length_extent(self, day):
        model = StepModel.build(TimeExtent(day(1), day(1)))
        assert model.interval == TimeValue.seconds(1)
        assert model.number_of_steps == 1

    @pytest.mark.parametrize("interval", [TimeValue.seconds(0), TimeValue.seconds(-5)])
    def test_non_positive_interval_inferred(self, interval):
        """A non-positive interval falls back to the one inferred from the span."""
        model = StepModel.build(TimeExtent.from_epoch_ms(0, 10), interval)
        assert model.interval == TimeValue.seconds(1)
        assert model.number_of_steps == 1

    def test_zero_interval_over_long_span(self, extent):
        model = StepModel.build(extent(0, 400), TimeValue.days(0))

        assert model.interval == TimeValue.years(1)
        assert model.number_of_steps == 2

    def test_min_interval_override(self):
        model = StepModel.build(
            TimeExtent.from_epoch_ms(0, 10), TimeValue.milliseconds(0.5), min_interval_ms=5.0
        )
        assert model.interval_ms == 5.0
        assert model.number_of_steps == 3

    def test_step_count_limit(self, extent):
        """One-millisecond steps over two days exceed the step limit."""
        model = StepModel.build(extent(0, 2), TimeValue.milliseconds(1))

        assert model.interval == TimeValue.days(1)
        assert model.number_of_steps == 3

    def test_fractional_interval_round_trip(self):
        model = StepModel.build(
            TimeExtent.from_epoch_ms(0, 30), TimeValue(1.5, TimeUnit.MILLISECONDS)
        )

        assert model.number_of_steps == 21
        assert model.step_times_ms[:4].tolist() == [0, 2, 3, 5]
        for i in range(-5, 25):
            assert model.index_at(model.time_at(i)) == i
        for i, ms in enumerate(model.step_times_ms.tolist()):
            assert model.index_at(from_epoch_ms(ms)) == i

    def test_time_at_and_index_at(self, extent, day):
        model = StepModel.build(extent(0, 10))

        for i in range(-3, 15):
            assert model.index_at(model.time_at(i)) == i

        assert model.index_at(day(1) + timedelta(hours=12)) == 1
        assert model.index_at(day(0) - timedelta(hours=1)) == -1
