"""
Core components - keyframe model, sampler and curve builder.
"""

from .exceptions import (
    CurveportException,
    ParameterError,
    InputShapeError,
    AccessorFailure,
    RemapError,
)

from .logging_config import (
    get_logger,
    setup_logging,
    LogContext,
    log_performance,
)

from .keyframe import (
    InterpolationType,
    ValueType,
    Ease,
    Shape,
    Value,
    Keyframe,
    SampledPoint,
    TimeRange,
    as_components,
    round_number,
    round_value,
    pick_axis,
)

from .accessor import PropertyAccessor, read_accessor

from .bezier import (
    CURVE_SEGMENTS,
    cubic_bezier_point,
    bezier_easing,
    curve_length,
    spatial_point,
)

from .sampler import (
    DEFAULT_PRECISION,
    COARSE_PRECISION,
    MAX_SAMPLES,
    sample,
    sample_points,
)

from .curves import (
    Handle,
    HoldSegment,
    LinearSegment,
    BezierSegment,
    CurveEnd,
    StaticValue,
    Segment,
    CurveBuilder,
    build_curve,
    curve_for_property,
    evaluate,
)

from .property import KeyframedProperty

__all__ = [
    # Exceptions
    "CurveportException",
    "ParameterError",
    "InputShapeError",
    "AccessorFailure",
    "RemapError",
    # Logging
    "get_logger",
    "setup_logging",
    "LogContext",
    "log_performance",
    # Keyframe model
    "InterpolationType",
    "ValueType",
    "Ease",
    "Shape",
    "Value",
    "Keyframe",
    "SampledPoint",
    "TimeRange",
    "as_components",
    "round_number",
    "round_value",
    "pick_axis",
    # Accessor
    "PropertyAccessor",
    "read_accessor",
    "KeyframedProperty",
    # Bezier
    "CURVE_SEGMENTS",
    "cubic_bezier_point",
    "bezier_easing",
    "curve_length",
    "spatial_point",
    # Sampler
    "DEFAULT_PRECISION",
    "COARSE_PRECISION",
    "MAX_SAMPLES",
    "sample",
    "sample_points",
    # Curves
    "Handle",
    "HoldSegment",
    "LinearSegment",
    "BezierSegment",
    "CurveEnd",
    "StaticValue",
    "Segment",
    "CurveBuilder",
    "build_curve",
    "curve_for_property",
    "evaluate",
]
