"""
Shared emitter types and number formatting.

Emitters are stateless formatters: a list of RemappedPoints in, one text
fragment out. They trust their input; NaN or unordered times end up in the
text as-is.
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple, runtime_checkable
import math


@dataclass(frozen=True)
class RemappedPoint:
    """
    One key in destination units.

    Attributes:
        time: Seconds
        value: Destination value for a single axis
        tangent_in: (x, y) fractions of the incoming segment's in handle
        tangent_out: (x, y) fractions of the outgoing segment's out handle
        hold: Value holds until the next point
    """
    time: float
    value: float
    tangent_in: Optional[Tuple[float, float]] = None
    tangent_out: Optional[Tuple[float, float]] = None
    hold: bool = False

    @property
    def has_handles(self) -> bool:
        return self.tangent_in is not None or self.tangent_out is not None


@runtime_checkable
class Emitter(Protocol):
    """Protocol for keyframe text backends."""

    supports_curves: bool

    def emit(self, points: List[RemappedPoint], **kwargs) -> str:
        ...


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from -inf."""
    return int(math.floor(value + 0.5))


def format_number(value: float) -> str:
    """Shortest text for a number; integral floats drop the fraction."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


__all__ = [
    "RemappedPoint",
    "Emitter",
    "round_half_up",
    "format_number",
]
