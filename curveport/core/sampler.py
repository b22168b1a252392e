"""
Discrete sampler - keyframe-equivalent series from per-frame evaluation.

Used for expression-driven properties, keyless properties and destinations
that only accept per-frame values. Walks the range frame by frame and keeps
the frames where the rounded value changes relative to a neighbour.
"""

from typing import Any, Hashable, List, Optional, Tuple

from .accessor import PropertyAccessor
from .exceptions import AccessorFailure, ParameterError
from .keyframe import SampledPoint, TimeRange, Value, pick_axis, round_value
from .logging_config import get_logger

logger = get_logger(__name__)

# Decimal precision for general export
DEFAULT_PRECISION = 3
# Decimal precision for threshold-insensitive callers
COARSE_PRECISION = 1
# Upper bound on frames evaluated per call
MAX_SAMPLES = 1_000_000


def _evaluate(prop: PropertyAccessor, time: float, axis: Optional[int]) -> Value:
    try:
        value = prop.value_at(time)
    except Exception as e:
        raise AccessorFailure(
            f"Could not evaluate property at {time:.6f}s: {e}",
            time=time,
            property_name=getattr(prop, "name", ""),
        ) from e
    return pick_axis(value, axis)


def _compare_key(value: Value, precision: int) -> Hashable:
    return round_value(value, precision)


def sample(
    prop: PropertyAccessor,
    time_range: TimeRange,
    precision: int = DEFAULT_PRECISION,
    axis: Optional[int] = None,
    max_samples: int = MAX_SAMPLES,
) -> Tuple[List[float], List[Any]]:
    """
    Sample a property into parallel (times, values) lists.

    A time is kept when its rounded value differs from the rounded value one
    frame before or one frame after. A range with no change yields a single
    point at the range start.

    Args:
        prop: Property to evaluate
        time_range: Window and frame step
        precision: Decimal places used for change detection
        axis: Optional component index (0=x, 1=y, 2=z) of a vector value
        max_samples: Refuse ranges with more frames than this

    Returns:
        (times, values) - non-empty, times strictly increasing, raw values

    Raises:
        ParameterError: If the range exceeds max_samples
        AccessorFailure: If the property cannot be evaluated
    """
    count = len(time_range)
    if count > max_samples:
        raise ParameterError(
            f"Sampling range has {count} frames, limit is {max_samples}",
            parameter_name="time_range",
            parameter_value=(time_range.start, time_range.end),
        )

    step = time_range.step
    times: List[float] = []
    values: List[Any] = []

    # Rolling window so each frame is evaluated once
    frame_times = list(time_range.times())
    if not frame_times:
        frame_times = [time_range.start]

    prev_key = _compare_key(_evaluate(prop, frame_times[0] - step, axis), precision)
    current = _evaluate(prop, frame_times[0], axis)
    current_key = _compare_key(current, precision)

    for i, t in enumerate(frame_times):
        next_time = frame_times[i + 1] if i + 1 < len(frame_times) else t + step
        upcoming = _evaluate(prop, next_time, axis)
        next_key = _compare_key(upcoming, precision)

        if current_key != prev_key or current_key != next_key:
            times.append(t)
            values.append(current)

        prev_key, current, current_key = current_key, upcoming, next_key

    if not times:
        times.append(time_range.start)
        values.append(_evaluate(prop, time_range.start, axis))

    logger.debug(
        f"Sampled '{getattr(prop, 'name', '')}': {len(frame_times)} frames -> {len(times)} points"
    )
    return times, values


def sample_points(
    prop: PropertyAccessor,
    time_range: TimeRange,
    precision: int = DEFAULT_PRECISION,
    axis: Optional[int] = None,
    max_samples: int = MAX_SAMPLES,
) -> List[SampledPoint]:
    """Same as ``sample`` but returns SampledPoint records."""
    times, values = sample(prop, time_range, precision, axis, max_samples)
    return [SampledPoint(time=t, value=v) for t, v in zip(times, values)]


__all__ = [
    "DEFAULT_PRECISION",
    "COARSE_PRECISION",
    "MAX_SAMPLES",
    "sample",
    "sample_points",
]
