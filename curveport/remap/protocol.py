"""
Value Remapper Protocol - per-destination tables of per-kind transforms.

A remapper converts a raw host value (pixels, percent, degrees) into the
units and orientation a destination expects. Each destination owns one
table keyed on PropertyKind; every entry is a pure function of the value,
the axis and the geometry context. New kinds are added as table entries.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

from ..core.exceptions import RemapError
from ..core.keyframe import Shape, Value


class PropertyKind(Enum):
    """
    Semantic kind of an animatable property.

    Transform:
        POSITION: Layer or shape position, pixels
        OFFSET: Offset effect center, pixels
        ANCHOR_POINT: Layer anchor point, pixels
        SCALE: Percent
        ROTATION: Degrees, clockwise in the host
        SKEW: Degrees

    Parameters:
        PERCENT: Bounded 0-100 parameter (opacity, sliders, blur)
        TRIM_OFFSET: Trim paths offset, degrees
        TEXT_START: Text animator range start, percent
        TEXT_OFFSET: Text animator range offset, -100..100 percent
        ELLIPSE_SIZE: Ellipse shape size, pixels
        RECT_SIZE: Rectangle shape size, pixels
        RECT_ROUNDNESS: Rectangle corner roundness, pixels
        VALUE: Pass-through
    """

    POSITION = "position"
    OFFSET = "offset"
    ANCHOR_POINT = "anchor_point"
    SCALE = "scale"
    ROTATION = "rotation"
    SKEW = "skew"
    PERCENT = "percent"
    TRIM_OFFSET = "trim_offset"
    TEXT_START = "text_start"
    TEXT_OFFSET = "text_offset"
    ELLIPSE_SIZE = "ellipse_size"
    RECT_SIZE = "rect_size"
    RECT_ROUNDNESS = "rect_roundness"
    VALUE = "value"


# Kinds whose animator carries a secondary ease-high percentage
EASE_HIGH_KINDS = frozenset({PropertyKind.TEXT_START, PropertyKind.TEXT_OFFSET})


@dataclass(frozen=True)
class Bounds:
    """Layer source rectangle in layer space, pixels."""
    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def center(self) -> Tuple[float, float]:
        return (self.left + self.width / 2, self.top + self.height / 2)


@dataclass(frozen=True)
class GeometryContext:
    """
    Composition and layer geometry a remap rule may need.

    Attributes:
        comp_width: Composition width, pixels
        comp_height: Composition height, pixels
        frame_duration: Seconds per frame
        display_start_time: Composition display start, seconds
        anchor: Layer anchor point, pixels (optional)
        bounds: Layer source rectangle (optional)
        ease_high: Text animator ease-high percentage (0-100)
        comp_duration: Composition duration, seconds; caps sampling of
            expression-driven properties (optional)
    """
    comp_width: float = 1920.0
    comp_height: float = 1080.0
    frame_duration: float = 1 / 30
    display_start_time: float = 0.0
    anchor: Optional[Tuple[float, ...]] = None
    bounds: Optional[Bounds] = None
    ease_high: float = 0.0
    comp_duration: Optional[float] = None

    @property
    def fps(self) -> float:
        return 1.0 / self.frame_duration


RemapRule = Callable[[float, int, GeometryContext], float]


@dataclass
class RemapConfig:
    """Configuration for value remappers."""
    destination: str = ""

    # Per-instance rule replacements (kind -> rule)
    rule_overrides: Dict[PropertyKind, RemapRule] = field(default_factory=dict)

    # Additional destination-specific settings
    extra: Dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class ValueRemapper(Protocol):
    """
    Protocol for destination remappers.

    Usage:
        remapper = FusionRemapper()
        value = remapper.remap(960.0, PropertyKind.POSITION, context, axis=0)
    """

    @property
    def config(self) -> RemapConfig:
        ...

    @property
    def supported_kinds(self) -> List[PropertyKind]:
        ...

    def remap(
        self,
        value: Value,
        kind: PropertyKind,
        context: GeometryContext,
        axis: Optional[int] = None,
    ) -> Union[float, Tuple[float, ...]]:
        """
        Convert a raw value into destination units.

        Args:
            value: Scalar or vector raw value
            kind: Property kind selecting the rule
            context: Geometry of the composition and layer
            axis: Component to convert; None converts every component

        Returns:
            Float for scalars or a single axis, tuple otherwise
        """
        ...


class BaseRemapper:
    """
    Base class for destination remappers.

    Subclasses declare ``RULES`` covering every PropertyKind; a missing
    entry is a TypeError at class creation.
    """

    DESTINATION = ""
    RULES: Dict[PropertyKind, RemapRule] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        missing = [kind.value for kind in PropertyKind if kind not in cls.RULES]
        if missing:
            raise TypeError(
                f"{cls.__name__} has no remap rule for: {', '.join(missing)}"
            )

    def __init__(self, config: Optional[RemapConfig] = None):
        self._config = config or RemapConfig(destination=self.DESTINATION)
        self._rules = {**self.RULES, **self._config.rule_overrides}

    @property
    def config(self) -> RemapConfig:
        return self._config

    @property
    def supported_kinds(self) -> List[PropertyKind]:
        return list(self._rules.keys())

    def rule(self, kind: PropertyKind) -> RemapRule:
        """Look up the rule for a kind."""
        try:
            return self._rules[kind]
        except KeyError:
            raise RemapError(
                f"No remap rule for kind '{kind}'",
                kind=kind,
                destination=self.DESTINATION,
            ) from None

    def remap(
        self,
        value: Value,
        kind: PropertyKind,
        context: GeometryContext,
        axis: Optional[int] = None,
    ) -> Union[float, Tuple[float, ...]]:
        """Convert a raw value into destination units."""
        if isinstance(value, Shape):
            raise RemapError(
                "Shape values are not remapped per kind",
                kind=kind,
                destination=self.DESTINATION,
            )
        rule = self.rule(kind)
        if isinstance(value, (int, float)):
            return rule(float(value), axis or 0, context)
        if axis is not None:
            return rule(float(value[axis]), axis, context)
        return tuple(rule(float(v), i, context) for i, v in enumerate(value))

    def remap_series(
        self,
        values: Sequence[Value],
        kind: PropertyKind,
        context: GeometryContext,
        axis: Optional[int] = None,
    ) -> List[Union[float, Tuple[float, ...]]]:
        """Remap every value of a series."""
        return [self.remap(v, kind, context, axis) for v in values]


def identity(value: float, axis: int, context: GeometryContext) -> float:
    """Pass-through rule."""
    return value


def percent(value: float, axis: int, context: GeometryContext) -> float:
    """0-100 percentage to a 0-1 fraction."""
    return value / 100


def trim_offset(value: float, axis: int, context: GeometryContext) -> float:
    """Degrees of trim offset to fraction of a turn."""
    return value / 360


__all__ = [
    "PropertyKind",
    "EASE_HIGH_KINDS",
    "Bounds",
    "GeometryContext",
    "RemapRule",
    "RemapConfig",
    "ValueRemapper",
    "BaseRemapper",
    "identity",
    "percent",
    "trim_offset",
]
