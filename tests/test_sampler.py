"""
Unit Tests for the Discrete Sampler

Run with: pytest tests/test_sampler.py -v
"""

import pytest
from curveport.core import (
    AccessorFailure,
    KeyframedProperty,
    ParameterError,
    TimeRange,
    ValueType,
    sample,
    sample_points,
)

FRAME = 1 / 30


def _expression(func, **kwargs):
    return KeyframedProperty("Expression", expression=func, **kwargs)


class TestTimeRange:
    """Tests for TimeRange construction and iteration."""

    def test_inclusive_length(self):
        assert len(TimeRange(0.0, 1.0, FRAME)) == 31

    def test_times_start_at_start(self):
        times = list(TimeRange(2.0, 3.0, 0.5).times())
        assert times == [2.0, 2.5, 3.0]

    def test_empty_when_reversed(self):
        assert len(TimeRange(1.0, 0.0, FRAME)) == 0

    @pytest.mark.parametrize("step", [0.0, -FRAME])
    def test_non_positive_step(self, step):
        with pytest.raises(ParameterError):
            TimeRange(0.0, 1.0, step)

    def test_for_keyed_property(self):
        prop = KeyframedProperty("Value")
        prop.add_keyframe(0.5, 0.0)
        prop.add_keyframe(2.0, 1.0)

        time_range = TimeRange.for_property(prop, FRAME)

        assert time_range.start == 0.5
        assert time_range.end == pytest.approx(2.0 + FRAME)

    def test_for_expression_property(self):
        prop = _expression(lambda t: t, in_point=1.0, out_point=4.0)
        prop.add_keyframe(2.0, 0.0)

        time_range = TimeRange.for_property(prop, FRAME)

        assert (time_range.start, time_range.end) == (1.0, 4.0)

    def test_expression_capped_by_duration(self):
        prop = _expression(lambda t: t, in_point=1.0, out_point=4.0)

        capped = TimeRange.for_property(prop, FRAME, duration=2.5)
        uncapped = TimeRange.for_property(prop, FRAME, duration=6.0)

        assert (capped.start, capped.end) == (1.0, 2.5)
        assert uncapped.end == 4.0

    def test_duration_ignored_for_keys(self):
        prop = KeyframedProperty("Value")
        prop.add_keyframe(0.0, 0.0)
        prop.add_keyframe(3.0, 1.0)

        time_range = TimeRange.for_property(prop, FRAME, duration=1.0)

        assert time_range.end == pytest.approx(3.0 + FRAME)

    def test_for_keyless_property(self):
        prop = KeyframedProperty("Value", in_point=3.0)

        time_range = TimeRange.for_property(prop, FRAME)

        assert time_range.start == 3.0
        assert time_range.end == pytest.approx(3.0 + FRAME)


class TestSample:
    """Tests for change detection."""

    def test_static_property_single_point(self):
        prop = KeyframedProperty("Value", static_value=5.0)

        times, values = sample(prop, TimeRange(0.0, 1.0, FRAME))

        assert times == [0.0]
        assert values == [5.0]

    def test_ramp_keeps_every_frame(self):
        prop = _expression(lambda t: t * 30)

        times, values = sample(prop, TimeRange(0.0, 1.0, FRAME))

        assert len(times) == 31
        assert values[10] == pytest.approx(10.0)

    def test_times_strictly_increasing(self):
        prop = _expression(lambda t: (t * 7) % 3)

        times, _ = sample(prop, TimeRange(0.0, 2.0, FRAME))

        assert all(a < b for a, b in zip(times, times[1:]))

    def test_step_change_keeps_both_sides(self):
        prop = _expression(lambda t: 0.0 if t < 0.51 else 1.0)

        times, values = sample(prop, TimeRange(0.0, 1.0, FRAME))

        assert times == [pytest.approx(15 * FRAME), pytest.approx(16 * FRAME)]
        assert values == [0.0, 1.0]

    def test_change_below_precision_ignored(self):
        prop = _expression(lambda t: 1e-5 * t)

        times, values = sample(prop, TimeRange(0.0, 1.0, FRAME))

        assert times == [0.0]

    def test_coarse_precision(self):
        prop = _expression(lambda t: 0.01 * t * 30)

        fine, _ = sample(prop, TimeRange(0.0, 1.0, FRAME), precision=3)
        coarse, _ = sample(prop, TimeRange(0.0, 1.0, FRAME), precision=1)

        assert len(coarse) < len(fine)

    def test_negative_zero_is_zero(self):
        prop = _expression(lambda t: -0.0 if t < 0.5 else 0.0)

        times, _ = sample(prop, TimeRange(0.0, 1.0, FRAME))

        assert times == [0.0]

    def test_vector_axis(self):
        prop = _expression(lambda t: (t * 30, 5.0), value_type=ValueType.TWO_D)

        times, values = sample(prop, TimeRange(0.0, 1.0, FRAME), axis=1)

        assert times == [0.0]
        assert values == [5.0]

    def test_vector_compares_all_axes(self):
        prop = _expression(
            lambda t: (0.0, 0.0 if t < 0.51 else 1.0),
            value_type=ValueType.TWO_D,
        )

        times, values = sample(prop, TimeRange(0.0, 1.0, FRAME))

        assert len(times) == 2
        assert values[1] == (0.0, 1.0)

    def test_sampling_is_idempotent(self):
        prop = _expression(lambda t: (t * 3) ** 2)
        time_range = TimeRange(0.0, 1.0, FRAME)

        assert sample(prop, time_range) == sample(prop, time_range)

    def test_sample_points(self):
        prop = KeyframedProperty("Value", static_value=2.0)

        points = sample_points(prop, TimeRange(1.0, 2.0, FRAME))

        assert len(points) == 1
        assert points[0].time == 1.0
        assert points[0].value == 2.0


class TestSampleErrors:
    """Tests for sampler failures."""

    def test_range_too_long(self):
        prop = KeyframedProperty("Value")

        with pytest.raises(ParameterError) as excinfo:
            sample(prop, TimeRange(0.0, 100.0, FRAME), max_samples=10)
        assert excinfo.value.details["parameter"] == "time_range"

    def test_accessor_failure_wraps_cause(self):
        def broken(t):
            raise ValueError("no layer")

        prop = _expression(broken)

        with pytest.raises(AccessorFailure) as excinfo:
            sample(prop, TimeRange(0.0, 1.0, FRAME))
        assert isinstance(excinfo.value.__cause__, ValueError)
        assert excinfo.value.details["property"] == "Expression"
