"""
Cubic Bezier helpers: CSS-style easing and spatial arc length.

Easing curves run through (0,0), (x1,y1), (x2,y2), (1,1) in normalized
time/value space. Spatial curves run from a start anchor to an end anchor
with control points offset by the keyframe tangents.
"""

import numpy as np
from typing import Sequence, Tuple

# Parametric steps used to approximate spatial arc length
CURVE_SEGMENTS = 200


def cubic_bezier_point(t: float, p0: float, p1: float, p2: float, p3: float) -> float:
    """Calculate point on cubic bezier curve at parameter t."""
    mt = 1 - t
    return mt*mt*mt*p0 + 3*mt*mt*t*p1 + 3*mt*t*t*p2 + t*t*t*p3


def bezier_easing(x1: float, y1: float, x2: float, y2: float, t: float) -> float:
    """
    CSS-style cubic bezier easing.

    Control points: (0,0), (x1,y1), (x2,y2), (1,1)

    Args:
        x1, y1: First control point (outgoing handle)
        x2, y2: Second control point (incoming handle)
        t: Input value 0-1 (normalized time)

    Returns:
        Eased progress; may leave 0-1 when y handles overshoot
    """
    if t <= 0:
        return 0.0
    if t >= 1:
        return 1.0

    # Binary search for the curve parameter whose x equals t.
    # x(param) is monotonic while x1, x2 stay inside [0, 1].
    low, high = 0.0, 1.0
    for _ in range(40):
        mid = (low + high) / 2
        x = cubic_bezier_point(mid, 0, x1, x2, 1)
        if x < t:
            low = mid
        else:
            high = mid

    param = (low + high) / 2
    return cubic_bezier_point(param, 0, y1, y2, 1)


def _control_points(
    start: Sequence[float],
    end: Sequence[float],
    tangent_out: Sequence[float],
    tangent_in: Sequence[float],
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    p0 = np.asarray(start, dtype=np.float64)
    p3 = np.asarray(end, dtype=np.float64)
    p1 = p0 + np.asarray(tangent_out, dtype=np.float64)
    p2 = p3 + np.asarray(tangent_in, dtype=np.float64)
    return p0, p1, p2, p3


def spatial_curve_points(
    start: Sequence[float],
    end: Sequence[float],
    tangent_out: Sequence[float],
    tangent_in: Sequence[float],
    segments: int = CURVE_SEGMENTS,
) -> np.ndarray:
    """
    Sample a tangent-defined cubic with three nested linear blends.

    Returns:
        Array of shape (segments, dims), parameters evenly spaced in [0, 1]
    """
    p0, p1, p2, p3 = _control_points(start, end, tangent_out, tangent_in)
    perc = np.linspace(0.0, 1.0, segments)[:, np.newaxis]

    tri1 = p0 + (p1 - p0) * perc
    tri2 = p1 + (p2 - p1) * perc
    tri3 = p2 + (p3 - p2) * perc
    lin1 = tri1 + (tri2 - tri1) * perc
    lin2 = tri2 + (tri3 - tri2) * perc
    return lin1 + (lin2 - lin1) * perc


def curve_length(
    start: Sequence[float],
    end: Sequence[float],
    tangent_out: Sequence[float],
    tangent_in: Sequence[float],
    segments: int = CURVE_SEGMENTS,
) -> float:
    """
    Approximate arc length of a spatial segment.

    Sums Euclidean distances between consecutive samples of the curve.
    With both tangents zero the samples lie on the chord and the result
    equals the anchor distance.
    """
    points = spatial_curve_points(start, end, tangent_out, tangent_in, segments)
    steps = np.diff(points, axis=0)
    return float(np.sqrt((steps ** 2).sum(axis=1)).sum())


def spatial_point(
    start: Sequence[float],
    end: Sequence[float],
    tangent_out: Sequence[float],
    tangent_in: Sequence[float],
    t: float,
) -> Tuple[float, ...]:
    """Point on a tangent-defined cubic at parameter t."""
    p0, p1, p2, p3 = _control_points(start, end, tangent_out, tangent_in)
    return tuple(
        float(cubic_bezier_point(t, a, b, c, d))
        for a, b, c, d in zip(p0, p1, p2, p3)
    )


__all__ = [
    "CURVE_SEGMENTS",
    "cubic_bezier_point",
    "bezier_easing",
    "spatial_curve_points",
    "curve_length",
    "spatial_point",
]
