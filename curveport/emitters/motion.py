"""
Motion keypoint emitter.

Produces the keypoint body of an Apple Motion curve:

    <time>158720 153600 1 0</time>
    <value>0.5</value>

Times are rational: ticks over a fixed timebase. When a point carries
handles, tangent time (seconds) and tangent value fields follow, relative
to the keypoint.
"""

from typing import List, Optional

from ..remap.protocol import EASE_HIGH_KINDS, PropertyKind
from .base import RemappedPoint, format_number, round_half_up

# Ticks per second of Motion's rational time
TIMEBASE = 153600


def ease_high_factor(kind: Optional[PropertyKind], ease_high: float) -> float:
    """
    Handle attenuation for text animator ranges.

    Only TEXT_START and TEXT_OFFSET carry an ease-high percentage; every
    other kind returns 0 (no attenuation).
    """
    if kind in EASE_HIGH_KINDS and ease_high > 0:
        return ease_high / 100
    return 0.0


class MotionKeypointEmitter:
    """
    Stateless formatter for Motion keypoints.

    Usage:
        emitter = MotionKeypointEmitter()
        text = emitter.emit(points, kind=PropertyKind.SCALE)
    """

    supports_curves = True

    def __init__(self, timebase: int = TIMEBASE, indent: str = ""):
        self.timebase = timebase
        self.indent = indent

    def ticks(self, time: float, display_start_time: float = 0.0) -> int:
        """Seconds to timebase ticks."""
        return round_half_up((display_start_time + time) * self.timebase)

    def emit(
        self,
        points: List[RemappedPoint],
        kind: Optional[PropertyKind] = None,
        ease_high: float = 0.0,
        display_start_time: float = 0.0,
        **kwargs,
    ) -> str:
        """
        One keypoint block per point.

        Args:
            points: Points in ascending time
            kind: Property kind, selects ease-high attenuation
            ease_high: Text animator ease-high percentage (0-100)
            display_start_time: Composition display start, seconds

        Returns:
            Newline separated XML fields
        """
        attenuation = ease_high_factor(kind, ease_high)

        def attenuate(v: float) -> float:
            return v - v * attenuation

        lines = []
        for i, point in enumerate(points):
            lines.append(
                f"<time>{self.ticks(point.time, display_start_time)} {self.timebase} 1 0</time>"
            )
            lines.append(f"<value>{format_number(point.value)}</value>")

            if point.tangent_in is not None and i > 0:
                x, y = point.tangent_in
                prev = points[i - 1]
                in_time = -(point.time - prev.time) * (1 - attenuate(x))
                in_value = -(point.value - prev.value) * (1 - attenuate(y))
                lines.append(f"<inputTangentTime>{format_number(in_time)}</inputTangentTime>")
                lines.append(f"<inputTangentValue>{format_number(in_value)}</inputTangentValue>")

            if point.tangent_out is not None and i + 1 < len(points):
                x, y = point.tangent_out
                nxt = points[i + 1]
                out_time = (nxt.time - point.time) * attenuate(x)
                out_value = (nxt.value - point.value) * attenuate(y)
                lines.append(f"<outputTangentTime>{format_number(out_time)}</outputTangentTime>")
                lines.append(f"<outputTangentValue>{format_number(out_value)}</outputTangentValue>")

        return "\n".join(f"{self.indent}{line}" for line in lines) + ("\n" if lines else "")


__all__ = ["MotionKeypointEmitter", "TIMEBASE", "ease_high_factor"]
