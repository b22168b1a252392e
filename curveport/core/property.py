"""
In-memory property accessor.

Drives the engine without a live host: holds native keyframes (or an
expression callable) and evaluates them through the curve builder.
Round-trips through JSON the same way keyframes do.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import json

from .curves import CurveBuilder, Segment, evaluate
from .keyframe import Ease, InterpolationType, Keyframe, Value, ValueType


@dataclass
class KeyframedProperty:
    """
    Property defined by native keyframes, optionally overridden by an
    expression.

    Attributes:
        name: Display name
        value_type: Value type of the property
        keyframes: Native keyframes sorted by time
        expression: Optional callable time -> value; when set the property
            is expression-driven and ``value_at`` calls it instead
        in_point: Owning layer in point, seconds
        out_point: Owning layer out point, seconds
        static_value: Value of a keyless, expression-free property

    Usage:
        prop = KeyframedProperty("Opacity", ValueType.ONE_D)
        prop.add_keyframe(0.0, 0.0)
        prop.add_keyframe(1.0, 100.0)
        prop.value_at(0.5)
    """
    name: str = "Property"
    value_type: ValueType = ValueType.ONE_D
    keyframes: List[Keyframe] = field(default_factory=list)
    expression: Optional[Callable[[float], Value]] = None
    in_point: float = 0.0
    out_point: float = 10.0
    static_value: Value = 0.0
    _curve_cache: Optional[Tuple[Tuple[Keyframe, ...], List[Segment]]] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        self._sort_keyframes()

    def _sort_keyframes(self):
        """Keep keyframes sorted by time."""
        self.keyframes.sort(key=lambda k: k.time)

    def add_keyframe(self, time: float, value: Value, **kwargs) -> Keyframe:
        """Add keyframe at time; kwargs are passed to Keyframe."""
        kf = Keyframe(time=time, value=value, **kwargs)
        self.keyframes.append(kf)
        self._sort_keyframes()
        self._curve_cache = None
        return kf

    # Accessor protocol -------------------------------------------------

    @property
    def is_spatial(self) -> bool:
        return self.value_type.is_spatial

    @property
    def expression_driven(self) -> bool:
        return self.expression is not None

    @property
    def keyframe_count(self) -> int:
        return len(self.keyframes)

    def value_at(self, time: float) -> Value:
        if self.expression is not None:
            return self.expression(time)
        if not self.keyframes:
            return self.static_value
        if len(self.keyframes) == 1:
            return self.keyframes[0].value
        return evaluate(self.curve(), time)

    def curve(self) -> List[Segment]:
        """Segment list of the native keyframes, rebuilt when they change."""
        key = tuple(self.keyframes)
        if self._curve_cache is None or self._curve_cache[0] != key:
            self._curve_cache = (key, CurveBuilder().build(self))
        return self._curve_cache[1]

    def keyframe_time(self, index: int) -> float:
        return self.keyframes[index].time

    def keyframe_value(self, index: int) -> Value:
        return self.keyframes[index].value

    def ease_in(self, index: int) -> Tuple[Ease, ...]:
        return self.keyframes[index].ease_in

    def ease_out(self, index: int) -> Tuple[Ease, ...]:
        return self.keyframes[index].ease_out

    def spatial_tangent_in(self, index: int) -> Optional[Tuple[float, ...]]:
        return self.keyframes[index].spatial_tangent_in

    def spatial_tangent_out(self, index: int) -> Optional[Tuple[float, ...]]:
        return self.keyframes[index].spatial_tangent_out

    def in_interpolation(self, index: int) -> InterpolationType:
        return self.keyframes[index].in_interpolation

    def out_interpolation(self, index: int) -> InterpolationType:
        return self.keyframes[index].out_interpolation

    # Serialization -----------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict. Expressions are not serialized."""
        static = self.static_value
        return {
            "name": self.name,
            "value_type": self.value_type.value,
            "keyframes": [kf.to_dict() for kf in self.keyframes],
            "in_point": self.in_point,
            "out_point": self.out_point,
            "static_value": list(static) if isinstance(static, tuple) else static,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KeyframedProperty':
        """Create from dict."""
        static = data.get("static_value", 0.0)
        return cls(
            name=data.get("name", "Property"),
            value_type=ValueType(data.get("value_type", "one_d")),
            keyframes=[Keyframe.from_dict(kf) for kf in data.get("keyframes", [])],
            in_point=data.get("in_point", 0.0),
            out_point=data.get("out_point", 10.0),
            static_value=tuple(static) if isinstance(static, list) else static,
        )

    def save(self, path: Union[str, Path]) -> None:
        """Save property to JSON file."""
        path = Path(path)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'KeyframedProperty':
        """Load property from JSON file."""
        path = Path(path)
        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)


__all__ = ["KeyframedProperty"]
