"""
Destination value remappers.

Remappers translate raw host values into destination units through
per-kind registration tables.
"""

from .protocol import (
    PropertyKind,
    EASE_HIGH_KINDS,
    Bounds,
    GeometryContext,
    RemapRule,
    RemapConfig,
    ValueRemapper,
    BaseRemapper,
)
from .fusion import FusionRemapper, FusionConfig
from .motion import MotionRemapper, MotionConfig

__all__ = [
    # Protocol
    "PropertyKind",
    "EASE_HIGH_KINDS",
    "Bounds",
    "GeometryContext",
    "RemapRule",
    "RemapConfig",
    "ValueRemapper",
    "BaseRemapper",
    # Fusion
    "FusionRemapper",
    "FusionConfig",
    # Motion
    "MotionRemapper",
    "MotionConfig",
]
