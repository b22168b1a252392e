"""
Motion value remapper - host units to Apple Motion units.

Motion measures positions in pixels from the canvas center with y up,
and rotations in radians counter-clockwise.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .protocol import (
    BaseRemapper,
    GeometryContext,
    PropertyKind,
    RemapConfig,
    identity,
    percent,
    trim_offset,
)


@dataclass
class MotionConfig(RemapConfig):
    """Motion-specific configuration."""
    destination: str = "motion"

    # Motion stores angles in radians; False keeps degrees
    rotation_in_radians: bool = True


def position(value: float, axis: int, context: GeometryContext) -> float:
    """Top-left pixels to center-origin pixels, y and z flipped."""
    if axis == 0:
        return value - context.comp_width / 2
    if axis == 1:
        return context.comp_height / 2 - value
    return -value


def offset(value: float, axis: int, context: GeometryContext) -> float:
    """Offset center in percent of the canvas, center origin, y up."""
    if axis == 0:
        return (value - context.comp_width / 2) / context.comp_width * 100
    return (context.comp_height / 2 - value) / context.comp_height * 100


def anchor_point(value: float, axis: int, context: GeometryContext) -> float:
    """Anchor relative to the layer center, y up."""
    bounds = context.bounds
    if bounds is None:
        return value if axis == 0 else -value
    if axis == 0:
        return value - bounds.width / 2
    return bounds.height / 2 - value


def rotation(value: float, axis: int, context: GeometryContext) -> float:
    """Clockwise degrees to counter-clockwise radians."""
    return math.radians(-value)


def rotation_degrees(value: float, axis: int, context: GeometryContext) -> float:
    return -value


def skew(value: float, axis: int, context: GeometryContext) -> float:
    return math.radians(value)


def text_offset(value: float, axis: int, context: GeometryContext) -> float:
    """-100..100 range offset to Motion's 0-1 offset, 0.5 at rest."""
    if value < 0:
        return (100 - abs(value)) / 2 / 100
    return (50 + value / 2) / 100


def half(value: float, axis: int, context: GeometryContext) -> float:
    """Full extent to radius/half extent."""
    return value / 2


class MotionRemapper(BaseRemapper):
    """
    Remapper for Apple Motion documents.

    Usage:
        remapper = MotionRemapper()
        x = remapper.remap(960.0, PropertyKind.POSITION, context, axis=0)
    """

    DESTINATION = "motion"

    RULES = {
        PropertyKind.POSITION: position,
        PropertyKind.OFFSET: offset,
        PropertyKind.ANCHOR_POINT: anchor_point,
        PropertyKind.SCALE: percent,
        PropertyKind.ROTATION: rotation,
        PropertyKind.SKEW: skew,
        PropertyKind.PERCENT: percent,
        PropertyKind.TRIM_OFFSET: trim_offset,
        PropertyKind.TEXT_START: percent,
        PropertyKind.TEXT_OFFSET: text_offset,
        PropertyKind.ELLIPSE_SIZE: half,
        PropertyKind.RECT_SIZE: identity,
        PropertyKind.RECT_ROUNDNESS: half,
        PropertyKind.VALUE: identity,
    }

    def __init__(self, config: Optional[MotionConfig] = None):
        super().__init__(config or MotionConfig())
        self._motion_config = self._config if isinstance(self._config, MotionConfig) else MotionConfig()
        if not self._motion_config.rotation_in_radians and PropertyKind.ROTATION not in self._config.rule_overrides:
            self._rules[PropertyKind.ROTATION] = rotation_degrees


__all__ = ["MotionRemapper", "MotionConfig"]
