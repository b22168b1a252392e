"""
Fusion value remapper - host units to DaVinci Fusion units.

Fusion works in normalized composition space: x and y run 0-1 with the
origin bottom-left, rotation is counter-clockwise in degrees.
"""

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
class FusionConfig(RemapConfig):
    """Fusion-specific configuration."""
    destination: str = "fusion"

    # Shift positions by the anchor/bounds offset of the layer
    anchor_correction: bool = True


def _axis_size(axis: int, context: GeometryContext) -> float:
    return context.comp_width if axis == 0 else context.comp_height


def position(value: float, axis: int, context: GeometryContext) -> float:
    """Pixels to normalized center, y flipped, corrected for anchor and bounds."""
    if axis > 1:
        return value
    size = _axis_size(axis, context)
    normalized = value / size
    if context.anchor is not None:
        normalized -= context.anchor[axis] / size
    if context.bounds is not None:
        normalized += context.bounds.center[axis] / size
    return normalized if axis == 0 else 1 - normalized


def offset(value: float, axis: int, context: GeometryContext) -> float:
    """Pixels to normalized center, y flipped, no anchor correction."""
    if axis > 1:
        return value
    normalized = value / _axis_size(axis, context)
    return normalized if axis == 0 else 1 - normalized


def anchor_point(value: float, axis: int, context: GeometryContext) -> float:
    return offset(value, axis, context)


def rotation(value: float, axis: int, context: GeometryContext) -> float:
    """Clockwise degrees to counter-clockwise degrees."""
    return -value


def ellipse_size(value: float, axis: int, context: GeometryContext) -> float:
    """Both ellipse axes are relative to the composition width."""
    return value / context.comp_width


def rect_size(value: float, axis: int, context: GeometryContext) -> float:
    return value / _axis_size(axis, context)


class FusionRemapper(BaseRemapper):
    """
    Remapper for DaVinci Fusion settings.

    Usage:
        remapper = FusionRemapper()
        center_x = remapper.remap(960.0, PropertyKind.POSITION, context, axis=0)
    """

    DESTINATION = "fusion"

    RULES = {
        PropertyKind.POSITION: position,
        PropertyKind.OFFSET: offset,
        PropertyKind.ANCHOR_POINT: anchor_point,
        PropertyKind.SCALE: percent,
        PropertyKind.ROTATION: rotation,
        PropertyKind.SKEW: identity,
        PropertyKind.PERCENT: percent,
        PropertyKind.TRIM_OFFSET: trim_offset,
        PropertyKind.TEXT_START: percent,
        PropertyKind.TEXT_OFFSET: percent,
        PropertyKind.ELLIPSE_SIZE: ellipse_size,
        PropertyKind.RECT_SIZE: rect_size,
        PropertyKind.RECT_ROUNDNESS: identity,
        PropertyKind.VALUE: identity,
    }

    def __init__(self, config: Optional[FusionConfig] = None):
        super().__init__(config or FusionConfig())
        self._fusion_config = self._config if isinstance(self._config, FusionConfig) else FusionConfig()
        if not self._fusion_config.anchor_correction and PropertyKind.POSITION not in self._config.rule_overrides:
            self._rules[PropertyKind.POSITION] = offset


__all__ = ["FusionRemapper", "FusionConfig"]
