"""
Keyframe, ease and time range data structures.

Host-agnostic model of a property's native keyframes as the accessor
reports them. Everything here is read-only once built.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Any, Tuple, Union, Iterator
from enum import Enum
import math

from .exceptions import ParameterError


class InterpolationType(Enum):
    """Interpolation on one side of a keyframe."""
    HOLD = "hold"           # Hold value until next keyframe
    LINEAR = "linear"       # Straight line, ease data ignored
    BEZIER = "bezier"       # Eased curve driven by influence/speed


class ValueType(Enum):
    """Shape of a property's value, mirrors the host's value types."""
    ONE_D = "one_d"
    TWO_D = "two_d"
    THREE_D = "three_d"
    TWO_D_SPATIAL = "two_d_spatial"
    THREE_D_SPATIAL = "three_d_spatial"
    COLOR = "color"
    SHAPE = "shape"

    @property
    def is_spatial(self) -> bool:
        return self in (ValueType.TWO_D_SPATIAL, ValueType.THREE_D_SPATIAL)

    @property
    def single_ease(self) -> bool:
        """Spatial and shape values carry one ease per side, not one per axis."""
        return self.is_spatial or self is ValueType.SHAPE


@dataclass(frozen=True)
class Ease:
    """
    Temporal ease on one side of a keyframe.

    Attributes:
        influence: Percentage (0-100) of the segment the ease extends over
        speed: Value units per second at the keyframe
    """
    influence: float = 16.666667
    speed: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"influence": self.influence, "speed": self.speed}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Ease':
        return cls(influence=data.get("influence", 16.666667), speed=data.get("speed", 0.0))


@dataclass(frozen=True)
class Shape:
    """Path value: vertices plus per-vertex in/out tangents."""
    vertices: Tuple[Tuple[float, ...], ...]
    in_tangents: Tuple[Tuple[float, ...], ...]
    out_tangents: Tuple[Tuple[float, ...], ...]
    closed: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vertices": [list(v) for v in self.vertices],
            "in_tangents": [list(v) for v in self.in_tangents],
            "out_tangents": [list(v) for v in self.out_tangents],
            "closed": self.closed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Shape':
        return cls(
            vertices=tuple(tuple(v) for v in data["vertices"]),
            in_tangents=tuple(tuple(v) for v in data["in_tangents"]),
            out_tangents=tuple(tuple(v) for v in data["out_tangents"]),
            closed=data.get("closed", True),
        )


Value = Union[float, Tuple[float, ...], Shape]


def as_components(value: Value) -> Tuple[float, ...]:
    """Scalar or vector value as a tuple of floats."""
    if isinstance(value, Shape):
        raise TypeError("Shape values have no scalar components")
    if isinstance(value, (int, float)):
        return (float(value),)
    return tuple(float(v) for v in value)


def round_number(num: float, decimals: int) -> float:
    """Round and canonicalize negative zero to zero."""
    return round(num, decimals) + 0.0


def round_value(value: Value, decimals: int) -> Value:
    """Round a scalar, vector or shape value component-wise."""
    if isinstance(value, Shape):
        def _points(points):
            return tuple(tuple(round_number(c, decimals) for c in p) for p in points)
        return Shape(
            vertices=_points(value.vertices),
            in_tangents=_points(value.in_tangents),
            out_tangents=_points(value.out_tangents),
            closed=value.closed,
        )
    if isinstance(value, (int, float)):
        return round_number(value, decimals)
    return tuple(round_number(v, decimals) for v in value)


def pick_axis(value: Value, axis: Optional[int]) -> Value:
    """Select one component of a vector value; None returns it unchanged."""
    if axis is None or isinstance(value, (int, float, Shape)):
        return value
    return float(value[axis])


def _value_to_json(value: Value) -> Any:
    if isinstance(value, Shape):
        return {"shape": value.to_dict()}
    if isinstance(value, (int, float)):
        return value
    return list(value)


def _value_from_json(data: Any) -> Value:
    if isinstance(data, dict):
        return Shape.from_dict(data["shape"])
    if isinstance(data, (list, tuple)):
        return tuple(float(v) for v in data)
    return float(data)


@dataclass(frozen=True)
class Keyframe:
    """
    Single native keyframe.

    Attributes:
        time: Key time in seconds
        value: Key value
        ease_in: Incoming eases (one per axis, or one for spatial/shape)
        ease_out: Outgoing eases
        in_interpolation: Interpolation arriving at this key
        out_interpolation: Interpolation leaving this key
        spatial_tangent_in: Incoming spatial tangent, spatial values only
        spatial_tangent_out: Outgoing spatial tangent, spatial values only
    """
    time: float
    value: Value
    ease_in: Tuple[Ease, ...] = (Ease(),)
    ease_out: Tuple[Ease, ...] = (Ease(),)
    in_interpolation: InterpolationType = InterpolationType.BEZIER
    out_interpolation: InterpolationType = InterpolationType.BEZIER
    spatial_tangent_in: Optional[Tuple[float, ...]] = None
    spatial_tangent_out: Optional[Tuple[float, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        data = {
            "time": self.time,
            "value": _value_to_json(self.value),
            "ease_in": [e.to_dict() for e in self.ease_in],
            "ease_out": [e.to_dict() for e in self.ease_out],
            "in_interpolation": self.in_interpolation.value,
            "out_interpolation": self.out_interpolation.value,
        }
        if self.spatial_tangent_in is not None:
            data["spatial_tangent_in"] = list(self.spatial_tangent_in)
        if self.spatial_tangent_out is not None:
            data["spatial_tangent_out"] = list(self.spatial_tangent_out)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Keyframe':
        """Create from dict."""
        tangent_in = data.get("spatial_tangent_in")
        tangent_out = data.get("spatial_tangent_out")
        return cls(
            time=float(data["time"]),
            value=_value_from_json(data["value"]),
            ease_in=tuple(Ease.from_dict(e) for e in data.get("ease_in", [{}])),
            ease_out=tuple(Ease.from_dict(e) for e in data.get("ease_out", [{}])),
            in_interpolation=InterpolationType(data.get("in_interpolation", "bezier")),
            out_interpolation=InterpolationType(data.get("out_interpolation", "bezier")),
            spatial_tangent_in=tuple(tangent_in) if tangent_in is not None else None,
            spatial_tangent_out=tuple(tangent_out) if tangent_out is not None else None,
        )


@dataclass(frozen=True)
class SampledPoint:
    """One (time, value) pair produced by the sampler."""
    time: float
    value: Value


@dataclass(frozen=True)
class TimeRange:
    """
    Sampling window in seconds.

    ``step`` is the frame duration and must be positive.
    """
    start: float
    end: float
    step: float

    def __post_init__(self):
        if not self.step > 0:
            raise ParameterError(
                "TimeRange step must be positive",
                parameter_name="step",
                parameter_value=self.step,
            )

    def __len__(self) -> int:
        if self.end < self.start:
            return 0
        # Tolerance keeps the end inclusive despite float division error
        return int(math.floor((self.end - self.start) / self.step + 1e-9)) + 1

    def times(self) -> Iterator[float]:
        """Yield every sample time, computed from the index to avoid drift."""
        for i in range(len(self)):
            yield self.start + i * self.step

    @classmethod
    def for_property(
        cls,
        prop,
        frame_duration: float,
        duration: Optional[float] = None,
    ) -> 'TimeRange':
        """
        Derive the active range of a property.

        Expression-driven properties span the layer in/out points, keyed
        properties span first to last key plus one frame, keyless properties
        get a single frame window at the layer in point.

        Args:
            prop: Property accessor
            frame_duration: Seconds per frame, becomes the step
            duration: Composition duration; caps the out point of
                expression-driven properties

        Raises:
            AccessorFailure: If the host cannot report the range
        """
        from .accessor import read_accessor

        in_point = read_accessor(prop, "in_point")
        if read_accessor(prop, "expression_driven"):
            out_point = read_accessor(prop, "out_point")
            if duration is not None:
                out_point = min(out_point, duration)
            return cls(in_point, out_point, frame_duration)
        count = read_accessor(prop, "keyframe_count")
        if count > 0:
            return cls(
                read_accessor(prop, "keyframe_time", 0),
                read_accessor(prop, "keyframe_time", count - 1) + frame_duration,
                frame_duration,
            )
        return cls(in_point, in_point + frame_duration, frame_duration)


__all__ = [
    "InterpolationType",
    "ValueType",
    "Ease",
    "Shape",
    "Value",
    "Keyframe",
    "SampledPoint",
    "TimeRange",
    "as_components",
    "round_number",
    "round_value",
    "pick_axis",
]
