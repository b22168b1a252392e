"""
Keyframe text backends.

Emitters turn remapped points into text fragments the caller splices into
a destination document.
"""

from .base import RemappedPoint, Emitter, round_half_up, format_number
from .fusion import FusionTableEmitter
from .motion import MotionKeypointEmitter, TIMEBASE, ease_high_factor

__all__ = [
    "RemappedPoint",
    "Emitter",
    "round_half_up",
    "format_number",
    "FusionTableEmitter",
    "MotionKeypointEmitter",
    "TIMEBASE",
    "ease_high_factor",
]
