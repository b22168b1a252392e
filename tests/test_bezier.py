"""
Unit Tests for Bezier helpers

Run with: pytest tests/test_bezier.py -v
"""

import math

import pytest
from curveport.core.bezier import (
    CURVE_SEGMENTS,
    bezier_easing,
    cubic_bezier_point,
    curve_length,
    spatial_curve_points,
    spatial_point,
)


class TestEasing:
    """Tests for CSS-style cubic easing."""

    def test_cubic_point_endpoints(self):
        assert cubic_bezier_point(0.0, 1, 2, 3, 4) == pytest.approx(1)
        assert cubic_bezier_point(1.0, 1, 2, 3, 4) == pytest.approx(4)

    def test_easing_clamps_outside_unit_range(self):
        assert bezier_easing(0.4, 0.0, 0.6, 1.0, -0.5) == 0.0
        assert bezier_easing(0.4, 0.0, 0.6, 1.0, 1.5) == 1.0

    def test_diagonal_handles_are_linear(self):
        """Handles on the diagonal leave progress unchanged."""
        for t in (0.1, 0.25, 0.5, 0.9):
            assert bezier_easing(0.167, 0.167, 0.833, 0.833, t) == pytest.approx(t, abs=1e-9)

    def test_symmetric_ease_hits_midpoint(self):
        assert bezier_easing(0.42, 0.0, 0.58, 1.0, 0.5) == pytest.approx(0.5, abs=1e-9)

    def test_ease_in_starts_slow(self):
        assert bezier_easing(0.42, 0.0, 1.0, 1.0, 0.2) < 0.2


class TestArcLength:
    """Tests for spatial arc length."""

    def test_zero_tangents_give_chord_length(self):
        length = curve_length((0, 0), (300, 400), (0, 0), (0, 0))
        assert length == pytest.approx(500.0)

    def test_default_resolution(self):
        points = spatial_curve_points((0, 0), (10, 0), (0, 0), (0, 0))
        assert points.shape == (CURVE_SEGMENTS, 2)

    def test_length_within_tolerance_of_fine_integration(self):
        """200 steps stay within 0.1% of a much finer integration."""
        args = ((0, 0), (400, 0), (100, 200), (-100, 200))
        coarse = curve_length(*args)
        fine = curve_length(*args, segments=20000)
        assert coarse == pytest.approx(fine, rel=1e-3)

    def test_curved_path_longer_than_chord(self):
        length = curve_length((0, 0), (400, 0), (100, 200), (-100, 200))
        assert length > 400.0

    def test_three_dimensional(self):
        length = curve_length((0, 0, 0), (0, 0, 50), (0, 0, 0), (0, 0, 0))
        assert length == pytest.approx(50.0)


class TestSpatialPoint:
    """Tests for points on a tangent-defined cubic."""

    def test_endpoints(self):
        args = ((0, 0), (100, 50), (10, 40), (-20, 10))
        assert spatial_point(*args, 0.0) == pytest.approx((0.0, 0.0))
        assert spatial_point(*args, 1.0) == pytest.approx((100.0, 50.0))

    def test_straight_midpoint(self):
        x, y = spatial_point((0, 0), (100, 0), (0, 0), (0, 0), 0.5)
        assert x == pytest.approx(50.0)
        assert math.isclose(y, 0.0, abs_tol=1e-12)
