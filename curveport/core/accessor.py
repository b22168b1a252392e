"""
Property Accessor Protocol - the read interface the engine consumes.

Hosts (a compositing application bridge, a JSON dump, a test double)
implement this to hand a single animatable property to the sampler and
the curve builder. Keyframe indices are 0-based.
"""

from typing import Any, Optional, Protocol, Tuple, runtime_checkable

from .exceptions import AccessorFailure, CurveportException
from .keyframe import Ease, InterpolationType, Value, ValueType


@runtime_checkable
class PropertyAccessor(Protocol):
    """
    Protocol for a host property handle.

    Implementations must be deterministic: evaluating the same time twice
    returns the same value. Concurrent reads at different times must be
    safe if callers export properties in parallel.
    """

    @property
    def name(self) -> str:
        """Display name, used in logs and error details."""
        ...

    @property
    def value_type(self) -> ValueType:
        """Value type of the property."""
        ...

    @property
    def is_spatial(self) -> bool:
        """True for position-like properties with spatial tangents."""
        ...

    @property
    def expression_driven(self) -> bool:
        """True when an expression overrides the native keyframes."""
        ...

    @property
    def in_point(self) -> float:
        """Owning layer's in point, seconds."""
        ...

    @property
    def out_point(self) -> float:
        """Owning layer's out point, seconds."""
        ...

    @property
    def keyframe_count(self) -> int:
        """Number of native keyframes."""
        ...

    def value_at(self, time: float) -> Value:
        """Evaluate the property at ``time`` seconds."""
        ...

    def keyframe_time(self, index: int) -> float:
        ...

    def keyframe_value(self, index: int) -> Value:
        ...

    def ease_in(self, index: int) -> Tuple[Ease, ...]:
        ...

    def ease_out(self, index: int) -> Tuple[Ease, ...]:
        ...

    def spatial_tangent_in(self, index: int) -> Optional[Tuple[float, ...]]:
        ...

    def spatial_tangent_out(self, index: int) -> Optional[Tuple[float, ...]]:
        ...

    def in_interpolation(self, index: int) -> InterpolationType:
        ...

    def out_interpolation(self, index: int) -> InterpolationType:
        ...


def read_accessor(prop: PropertyAccessor, member: str, *args: Any) -> Any:
    """
    Read one accessor member, wrapping host errors.

    Properties are read with no ``args``; methods are called with them.

    Args:
        prop: Property handle
        member: Attribute or method name on the accessor
        *args: Arguments for method members (a keyframe index)

    Returns:
        Whatever the accessor returns

    Raises:
        AccessorFailure: If the host raises while reading
    """
    try:
        value = getattr(prop, member)
        return value(*args) if args else value
    except CurveportException:
        raise
    except Exception as e:
        detail = f"{member}({', '.join(map(str, args))})" if args else member
        raise AccessorFailure(
            f"Could not read {detail}: {e}",
            property_name=getattr(prop, "name", ""),
            member=member,
        ) from e


__all__ = ["PropertyAccessor", "read_accessor"]
