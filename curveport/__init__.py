"""
Keyframe curve porting engine.

Rebuilds continuous Bezier curves from a host's ease-parameterized
keyframes, or samples expression-driven properties frame by frame, and
writes the result as DaVinci Fusion tables or Apple Motion keypoints.

Usage:
    from curveport import KeyframedProperty, ValueType, PropertyExporter, ExportJob
    from curveport import PropertyKind, Destination, GeometryContext

    # Describe a property
    prop = KeyframedProperty("Opacity", ValueType.ONE_D)
    prop.add_keyframe(0.0, 0.0)
    prop.add_keyframe(1.0, 100.0)

    # Export for Motion
    exporter = PropertyExporter()
    text = exporter.export(ExportJob(
        name="Opacity",
        accessor=prop,
        kind=PropertyKind.PERCENT,
        destination=Destination.MOTION,
        context=GeometryContext(comp_width=1920, comp_height=1080),
    ))
"""

from .core import (
    # Exceptions
    CurveportException,
    ParameterError,
    InputShapeError,
    AccessorFailure,
    RemapError,
    # Logging
    get_logger,
    setup_logging,
    LogContext,
    # Keyframe model
    InterpolationType,
    ValueType,
    Ease,
    Shape,
    Keyframe,
    SampledPoint,
    TimeRange,
    PropertyAccessor,
    KeyframedProperty,
    # Sampler
    sample,
    sample_points,
    # Curves
    Handle,
    HoldSegment,
    LinearSegment,
    BezierSegment,
    CurveEnd,
    StaticValue,
    CurveBuilder,
    build_curve,
    curve_for_property,
    evaluate,
)

from .remap import (
    PropertyKind,
    Bounds,
    GeometryContext,
    RemapConfig,
    ValueRemapper,
    BaseRemapper,
    FusionRemapper,
    FusionConfig,
    MotionRemapper,
    MotionConfig,
)

from .emitters import (
    RemappedPoint,
    FusionTableEmitter,
    MotionKeypointEmitter,
)

from .exporter import (
    Destination,
    ExportConfig,
    ExportJob,
    ExportResult,
    PropertyExporter,
    points_from_segments,
    export_property,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core - Exceptions
    "CurveportException",
    "ParameterError",
    "InputShapeError",
    "AccessorFailure",
    "RemapError",
    # Core - Logging
    "get_logger",
    "setup_logging",
    "LogContext",
    # Core - Keyframe model
    "InterpolationType",
    "ValueType",
    "Ease",
    "Shape",
    "Keyframe",
    "SampledPoint",
    "TimeRange",
    "PropertyAccessor",
    "KeyframedProperty",
    # Core - Sampler
    "sample",
    "sample_points",
    # Core - Curves
    "Handle",
    "HoldSegment",
    "LinearSegment",
    "BezierSegment",
    "CurveEnd",
    "StaticValue",
    "CurveBuilder",
    "build_curve",
    "curve_for_property",
    "evaluate",
    # Remap
    "PropertyKind",
    "Bounds",
    "GeometryContext",
    "RemapConfig",
    "ValueRemapper",
    "BaseRemapper",
    "FusionRemapper",
    "FusionConfig",
    "MotionRemapper",
    "MotionConfig",
    # Emitters
    "RemappedPoint",
    "FusionTableEmitter",
    "MotionKeypointEmitter",
    # Exporter
    "Destination",
    "ExportConfig",
    "ExportJob",
    "ExportResult",
    "PropertyExporter",
    "points_from_segments",
    "export_property",
]
