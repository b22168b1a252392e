"""
Fusion table emitter.

Produces entries of a Lua-style keyframe table, keyed by destination
frame:

    [12] = { 0.4231950000, Flags = { StepIn = true } },

The caller owns the enclosing ``BezierSpline { KeyFrames = { ... } }``
and splices the fragment in.
"""

from typing import List

from .base import RemappedPoint, format_number, round_half_up

VALUE_DECIMALS = 10


def _fixed(value: float) -> str:
    return f"{value:.{VALUE_DECIMALS}f}"


class FusionTableEmitter:
    """
    Stateless formatter for Fusion keyframe tables.

    Usage:
        emitter = FusionTableEmitter()
        text = emitter.emit(points, frame_duration=1 / 30)
    """

    # The stepped table holds every key; ``emit_bezier`` carries handles
    supports_curves = False

    def __init__(self, indent: str = ""):
        self.indent = indent

    def frame_key(self, time: float, frame_duration: float, frame_offset: int = 0) -> int:
        """Integer destination frame for a time in seconds."""
        return round_half_up(time / frame_duration) + frame_offset

    def emit(
        self,
        points: List[RemappedPoint],
        frame_duration: float = 1 / 30,
        frame_offset: int = 0,
        **kwargs,
    ) -> str:
        """
        One stepped entry per point.

        Args:
            points: Points in ascending time
            frame_duration: Seconds per frame
            frame_offset: Added to every frame key (display start, layer
                in point of a template)

        Returns:
            Newline separated entries, each ending in a comma
        """
        lines = []
        for point in points:
            frame = self.frame_key(point.time, frame_duration, frame_offset)
            lines.append(
                f"{self.indent}[{frame}] = {{ {_fixed(point.value)}, "
                f"Flags = {{ StepIn = true }} }},"
            )
        return "\n".join(lines) + ("\n" if lines else "")

    def emit_bezier(
        self,
        points: List[RemappedPoint],
        frame_duration: float = 1 / 30,
        frame_offset: float = 0.0,
    ) -> str:
        """
        One entry per point with absolute left/right handles.

        Handle positions are ``a + (b - a) * fraction`` between the point
        and its neighbour, in frames and destination units.

        Returns:
            Entries joined with commas
        """
        frames = [round(p.time / frame_duration + frame_offset, 3) for p in points]
        entries = []
        for i, point in enumerate(points):
            frame = frames[i]
            parts = [_fixed(point.value)]

            if point.tangent_in is not None and i > 0:
                x, y = point.tangent_in
                prev = points[i - 1]
                lh_time = frames[i - 1] + (frame - frames[i - 1]) * x
                lh_value = prev.value + (point.value - prev.value) * y
                parts.append(f"LH = {{ {_fixed(lh_time)}, {_fixed(lh_value)} }}")

            if point.tangent_out is not None and i + 1 < len(points):
                x, y = point.tangent_out
                nxt = points[i + 1]
                rh_time = frame + (frames[i + 1] - frame) * x
                rh_value = point.value + (nxt.value - point.value) * y
                parts.append(f"RH = {{ {_fixed(rh_time)}, {_fixed(rh_value)} }}")

            if point.hold:
                parts.append("Flags = { StepIn = true }")

            entries.append(f"{self.indent}[{format_number(frame)}] = {{ {', '.join(parts)} }}")
        return ",\n".join(entries)


__all__ = ["FusionTableEmitter", "VALUE_DECIMALS"]
