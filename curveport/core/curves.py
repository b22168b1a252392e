"""
Curve builder - native eased keyframes to normalized Bezier segments.

Each pair of consecutive keyframes becomes one segment. Eased segments
carry an outgoing and an incoming handle whose x is a fraction of the
segment duration and whose y is a fraction of the segment value delta,
the representation used by CSS-style cubic easing.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .accessor import PropertyAccessor, read_accessor
from .bezier import bezier_easing, curve_length, spatial_point
from .exceptions import InputShapeError
from .keyframe import (
    Ease,
    InterpolationType,
    Shape,
    Value,
    as_components,
    round_number,
    round_value,
)
from .logging_config import get_logger

logger = get_logger(__name__)

# Decimal places kept on handles and segment values
HANDLE_PRECISION = 3


@dataclass(frozen=True)
class Handle:
    """
    Normalized Bezier handle, one entry per axis.

    Spatial and shape segments carry a single entry shared by all axes.
    """
    x: Tuple[float, ...]
    y: Tuple[float, ...]

    def axis(self, index: int) -> Tuple[float, float]:
        """(x, y) for one axis, broadcasting single-entry handles."""
        i = index if len(self.x) > 1 else 0
        return self.x[i], self.y[i]


@dataclass(frozen=True)
class HoldSegment:
    """Value stays at ``value`` until the next keyframe."""
    time: float
    value: Value


@dataclass(frozen=True)
class LinearSegment:
    """Both sides linear; handles lie on the diagonal (y == x)."""
    time: float
    value: Value
    out_handle: Handle
    in_handle: Handle


@dataclass(frozen=True)
class BezierSegment:
    """Eased segment; spatial segments keep their raw tangents."""
    time: float
    value: Value
    out_handle: Handle
    in_handle: Handle
    tangent_out: Optional[Tuple[float, ...]] = None
    tangent_in: Optional[Tuple[float, ...]] = None


@dataclass(frozen=True)
class CurveEnd:
    """Terminal point of a curve, never carries handles."""
    time: float
    value: Value


@dataclass(frozen=True)
class StaticValue:
    """A single-keyframe property: one value for all time."""
    time: float
    value: Value


Segment = Union[HoldSegment, LinearSegment, BezierSegment, CurveEnd]


def _handle_y(
    out_x: float,
    in_x: float,
    ease_out: Ease,
    ease_in: Ease,
    average_speed: float,
    linear: bool,
) -> Tuple[float, float]:
    """Value fractions of the out/in handles."""
    if linear or average_speed == 0:
        return out_x, in_x
    out_y = (ease_out.speed / average_speed) * out_x
    in_y = 1 - (ease_in.speed / average_speed) * (ease_in.influence / 100)
    return out_y, in_y


def _rounded(values) -> Tuple[float, ...]:
    return tuple(round_number(v, HANDLE_PRECISION) for v in values)


def _ease_for_axis(eases: Tuple[Ease, ...], axis: int) -> Ease:
    return eases[axis] if axis < len(eases) else eases[-1]


class CurveBuilder:
    """
    Build Segment lists from a property's native keyframes.

    Usage:
        builder = CurveBuilder()
        segments = builder.build(prop)
        # [BezierSegment(...), HoldSegment(...), ..., CurveEnd(...)]
    """

    def __init__(self, curve_segments: Optional[int] = None):
        # None keeps the bezier module default
        self.curve_segments = curve_segments

    def build(self, prop: PropertyAccessor) -> List[Segment]:
        """
        Build the segment list spanning the first to the last keyframe.

        Args:
            prop: Property with at least two native keyframes

        Returns:
            One segment per keyframe pair followed by a CurveEnd

        Raises:
            InputShapeError: If the property has fewer than two keyframes
                or two keyframes share a time
        """
        count = read_accessor(prop, "keyframe_count")
        if count < 2:
            raise InputShapeError(
                "Curve reconstruction needs at least two keyframes",
                keyframe_count=count,
                property=prop.name,
            )

        segments: List[Segment] = []
        for index in range(count - 1):
            segments.append(self._build_segment(prop, index))

        last = count - 1
        segments.append(CurveEnd(
            time=read_accessor(prop, "keyframe_time", last),
            value=round_value(read_accessor(prop, "keyframe_value", last), HANDLE_PRECISION),
        ))

        logger.debug(f"Built {len(segments) - 1} segments for '{prop.name}'")
        return segments

    def _build_segment(self, prop: PropertyAccessor, index: int) -> Segment:
        start_time = read_accessor(prop, "keyframe_time", index)
        start_value = read_accessor(prop, "keyframe_value", index)

        if read_accessor(prop, "out_interpolation", index) is InterpolationType.HOLD:
            return HoldSegment(
                time=start_time,
                value=round_value(start_value, HANDLE_PRECISION),
            )

        end_time = read_accessor(prop, "keyframe_time", index + 1)
        end_value = read_accessor(prop, "keyframe_value", index + 1)
        duration = end_time - start_time
        if duration <= 0:
            raise InputShapeError(
                "Keyframe times must be strictly increasing",
                property=prop.name,
                index=index,
                time=start_time,
            )

        linear = (
            read_accessor(prop, "out_interpolation", index) is InterpolationType.LINEAR
            and read_accessor(prop, "in_interpolation", index + 1) is InterpolationType.LINEAR
        )
        ease_out = read_accessor(prop, "ease_out", index)
        ease_in = read_accessor(prop, "ease_in", index + 1)

        if read_accessor(prop, "is_spatial") or read_accessor(prop, "value_type").single_ease:
            return self._single_ease_segment(
                prop, index, start_time, start_value, end_value,
                duration, ease_out[0], ease_in[0], linear,
            )

        start = as_components(start_value)
        end = as_components(end_value)
        out_x, out_y, in_x, in_y = [], [], [], []
        for axis in range(len(start)):
            axis_out = _ease_for_axis(ease_out, axis)
            axis_in = _ease_for_axis(ease_in, axis)
            ox = axis_out.influence / 100
            ix = 1 - axis_in.influence / 100
            average_speed = (end[axis] - start[axis]) / duration
            oy, iy = _handle_y(ox, ix, axis_out, axis_in, average_speed, linear)
            out_x.append(ox)
            out_y.append(oy)
            in_x.append(ix)
            in_y.append(iy)

        out_handle = Handle(x=_rounded(out_x), y=_rounded(out_y))
        in_handle = Handle(x=_rounded(in_x), y=_rounded(in_y))
        segment_cls = LinearSegment if linear else BezierSegment
        return segment_cls(
            time=start_time,
            value=round_value(start_value, HANDLE_PRECISION),
            out_handle=out_handle,
            in_handle=in_handle,
        )

    def _single_ease_segment(
        self,
        prop: PropertyAccessor,
        index: int,
        start_time: float,
        start_value: Value,
        end_value: Value,
        duration: float,
        ease_out: Ease,
        ease_in: Ease,
        linear: bool,
    ) -> Segment:
        """Spatial or shape segment: one ease per side for all axes."""
        out_x = ease_out.influence / 100
        in_x = 1 - ease_in.influence / 100
        tangent_out = tangent_in = None

        if linear:
            average_speed = 0.0
        elif read_accessor(prop, "is_spatial"):
            dims = len(as_components(start_value))
            tangent_out = read_accessor(prop, "spatial_tangent_out", index) or (0.0,) * dims
            tangent_in = read_accessor(prop, "spatial_tangent_in", index + 1) or (0.0,) * dims
            kwargs = {}
            if self.curve_segments is not None:
                kwargs["segments"] = self.curve_segments
            length = curve_length(
                as_components(start_value),
                as_components(end_value),
                tangent_out,
                tangent_in,
                **kwargs,
            )
            average_speed = length / duration
        else:
            # Shape keys have no path between them; host speeds are normalized
            average_speed = 1.0

        out_y, in_y = _handle_y(out_x, in_x, ease_out, ease_in, average_speed, linear)
        out_handle = Handle(x=_rounded([out_x]), y=_rounded([out_y]))
        in_handle = Handle(x=_rounded([in_x]), y=_rounded([in_y]))
        rounded_value = round_value(start_value, HANDLE_PRECISION)

        if linear:
            return LinearSegment(
                time=start_time,
                value=rounded_value,
                out_handle=out_handle,
                in_handle=in_handle,
            )
        return BezierSegment(
            time=start_time,
            value=rounded_value,
            out_handle=out_handle,
            in_handle=in_handle,
            tangent_out=tuple(tangent_out) if tangent_out is not None else None,
            tangent_in=tuple(tangent_in) if tangent_in is not None else None,
        )


def build_curve(prop: PropertyAccessor) -> List[Segment]:
    """Convenience function wrapping ``CurveBuilder().build``."""
    return CurveBuilder().build(prop)


def curve_for_property(prop: PropertyAccessor) -> Union[StaticValue, List[Segment]]:
    """
    Build a curve, short-circuiting single-keyframe properties.

    Returns:
        StaticValue for one keyframe, otherwise the segment list

    Raises:
        InputShapeError: If the property has no keyframes
    """
    if read_accessor(prop, "keyframe_count") == 1:
        return StaticValue(
            time=read_accessor(prop, "keyframe_time", 0),
            value=round_value(read_accessor(prop, "keyframe_value", 0), HANDLE_PRECISION),
        )
    return build_curve(prop)


def _blend_shape(start: Shape, end: Shape, progress: float) -> Shape:
    def _points(a, b):
        return tuple(
            tuple(pa + (pb - pa) * progress for pa, pb in zip(p, q))
            for p, q in zip(a, b)
        )
    return Shape(
        vertices=_points(start.vertices, end.vertices),
        in_tangents=_points(start.in_tangents, end.in_tangents),
        out_tangents=_points(start.out_tangents, end.out_tangents),
        closed=start.closed,
    )


def evaluate(segments: List[Segment], time: float) -> Value:
    """
    Read a value back out of a segment list.

    Times before the first or after the last segment clamp to the end
    values. Hold segments return their start value; eased segments use
    CSS-style cubic easing through (0,0), out handle, in handle, (1,1).
    """
    if not segments:
        raise ValueError("Cannot evaluate an empty curve")

    first, last = segments[0], segments[-1]
    if len(segments) == 1 or time <= first.time:
        return first.value
    if time >= last.time:
        return last.value

    index = 0
    while segments[index + 1].time <= time:
        index += 1
    segment = segments[index]
    following = segments[index + 1]

    if isinstance(segment, HoldSegment):
        return segment.value

    progress = (time - segment.time) / (following.time - segment.time)

    def eased(axis: int) -> float:
        out_x, out_y = segment.out_handle.axis(axis)
        in_x, in_y = segment.in_handle.axis(axis)
        return bezier_easing(out_x, out_y, in_x, in_y, progress)

    if isinstance(segment.value, Shape):
        return _blend_shape(segment.value, following.value, eased(0))

    if isinstance(segment, BezierSegment) and segment.tangent_out is not None:
        return spatial_point(
            as_components(segment.value),
            as_components(following.value),
            segment.tangent_out,
            segment.tangent_in,
            eased(0),
        )

    start = as_components(segment.value)
    end = as_components(following.value)
    result = tuple(
        a + (b - a) * eased(axis)
        for axis, (a, b) in enumerate(zip(start, end))
    )
    if isinstance(segment.value, (int, float)):
        return result[0]
    return result


__all__ = [
    "HANDLE_PRECISION",
    "Handle",
    "HoldSegment",
    "LinearSegment",
    "BezierSegment",
    "CurveEnd",
    "StaticValue",
    "Segment",
    "CurveBuilder",
    "build_curve",
    "curve_for_property",
    "evaluate",
]
