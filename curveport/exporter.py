"""
Property exporter - routes one property through the engine to keyframe text.

Curve reconstruction is used when the destination accepts continuous
curves and the property has native keyframes; everything else is sampled
frame by frame. Either way the values are remapped into destination units
and handed to exactly one emitter.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json

from .core import (
    BezierSegment,
    CurveBuilder,
    CurveportException,
    HoldSegment,
    InterpolationType,
    LinearSegment,
    ParameterError,
    PropertyAccessor,
    Segment,
    Shape,
    TimeRange,
    get_logger,
    log_performance,
    pick_axis,
    read_accessor,
    sample,
)
from .core.sampler import DEFAULT_PRECISION, MAX_SAMPLES
from .emitters import FusionTableEmitter, MotionKeypointEmitter, RemappedPoint, TIMEBASE
from .emitters.base import round_half_up
from .remap import BaseRemapper, FusionRemapper, GeometryContext, MotionRemapper, PropertyKind

logger = get_logger(__name__)


class Destination(Enum):
    """Target animation system."""
    FUSION = "fusion"   # DaVinci Fusion, stepped Lua tables
    MOTION = "motion"   # Apple Motion, XML keypoints


@dataclass
class ExportConfig:
    """
    Exporter configuration.

    Attributes:
        precision: Decimal places for sampler change detection
        max_samples: Largest frame count the sampler will walk
        timebase: Motion ticks per second
        prefer_curves: Reconstruct curves where the destination allows it
        indent: Prefix for every emitted line
    """
    precision: int = DEFAULT_PRECISION
    max_samples: int = MAX_SAMPLES
    timebase: int = TIMEBASE
    prefer_curves: bool = True
    indent: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExportConfig':
        """Create from dict, ignoring unknown keys."""
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)

    def save(self, path: Union[str, Path]) -> None:
        """Save config to JSON file."""
        path = Path(path)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'ExportConfig':
        """Load config from JSON file."""
        path = Path(path)
        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)


@dataclass
class ExportJob:
    """
    One property to export.

    Attributes:
        name: Label carried into the result
        accessor: Property to read
        kind: Semantic kind selecting the remap rule
        destination: Target system
        context: Composition and layer geometry
        axis: Component of a vector value to export (0=x, 1=y, 2=z)
        template: Frames and keypoint times are relative to the layer in point
    """
    name: str
    accessor: PropertyAccessor
    kind: PropertyKind = PropertyKind.VALUE
    destination: Destination = Destination.FUSION
    context: GeometryContext = field(default_factory=GeometryContext)
    axis: Optional[int] = None
    template: bool = False


@dataclass
class ExportResult:
    """Outcome of one job: text on success, error otherwise."""
    name: str
    text: Optional[str] = None
    error: Optional[CurveportException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def points_from_segments(segments: List[Segment], axis: Optional[int] = None) -> List[RemappedPoint]:
    """
    Convert a segment list to single-axis points carrying handle fractions.

    Point ``i`` takes its outgoing handle from segment ``i`` and its
    incoming handle from segment ``i - 1``. Hold segments mark their start
    point and contribute no handles.

    Args:
        segments: Output of CurveBuilder.build
        axis: Component of vector values; spatial handles are shared

    Returns:
        One point per segment, values still in host units
    """
    handle_axis = axis or 0
    points = []
    for i, segment in enumerate(segments):
        value = pick_axis(segment.value, axis)
        if isinstance(value, Shape):
            raise ParameterError(
                "Shape curves cannot be flattened to single-axis points",
                parameter_name="segments",
            )
        if not isinstance(value, (int, float)):
            raise ParameterError(
                "Vector curves need an axis",
                parameter_name="axis",
                parameter_value=axis,
            )

        tangent_out = None
        if isinstance(segment, (LinearSegment, BezierSegment)):
            tangent_out = segment.out_handle.axis(handle_axis)

        tangent_in = None
        previous = segments[i - 1] if i > 0 else None
        if isinstance(previous, (LinearSegment, BezierSegment)):
            tangent_in = previous.in_handle.axis(handle_axis)

        points.append(RemappedPoint(
            time=segment.time,
            value=float(value),
            tangent_in=tangent_in,
            tangent_out=tangent_out,
            hold=isinstance(segment, HoldSegment),
        ))
    return points


class PropertyExporter:
    """
    Export properties to Fusion or Motion keyframe text.

    Usage:
        exporter = PropertyExporter()
        job = ExportJob("Opacity", prop, PropertyKind.PERCENT, Destination.MOTION)
        text = exporter.export(job)

        results = exporter.export_all([job, other_job])
        failed = [r for r in results if not r.ok]
    """

    def __init__(self, config: Optional[ExportConfig] = None):
        self.config = config or ExportConfig()
        self.builder = CurveBuilder()
        self.remappers: Dict[Destination, BaseRemapper] = {
            Destination.FUSION: FusionRemapper(),
            Destination.MOTION: MotionRemapper(),
        }
        self.emitters = {
            Destination.FUSION: FusionTableEmitter(indent=self.config.indent),
            Destination.MOTION: MotionKeypointEmitter(
                timebase=self.config.timebase,
                indent=self.config.indent,
            ),
        }

    def uses_curves(self, job: ExportJob) -> bool:
        """Whether the job goes through curve reconstruction."""
        prop = job.accessor
        if not (self.config.prefer_curves and self.emitters[job.destination].supports_curves):
            return False
        if read_accessor(prop, "expression_driven") or read_accessor(prop, "keyframe_count") < 2:
            return False
        # A held key has no keypoint equivalent
        return not _has_hold_keys(prop)

    @log_performance
    def export(self, job: ExportJob) -> str:
        """
        Export a single property.

        Args:
            job: Property, kind, destination and geometry

        Returns:
            Emitted text fragment

        Raises:
            CurveportException: If any stage fails
        """
        if self.uses_curves(job):
            points = points_from_segments(self.builder.build(job.accessor), job.axis)
            route = "curves"
        else:
            points = self._sampled_points(job)
            route = "sampled"

        points = self._remap(points, job)
        logger.debug(f"{job.name}: {len(points)} points via {route} -> {job.destination.value}")
        return self._emit(points, job)

    def export_all(self, jobs: List[ExportJob]) -> List[ExportResult]:
        """
        Export several properties; a failing job does not affect the others.

        Returns:
            One ExportResult per job, in order
        """
        results = []
        for job in jobs:
            try:
                results.append(ExportResult(name=job.name, text=self.export(job)))
            except CurveportException as e:
                logger.warning(f"Export of '{job.name}' failed: {e}")
                results.append(ExportResult(name=job.name, error=e))

        failed = sum(1 for r in results if not r.ok)
        if failed:
            logger.info(f"Exported {len(results) - failed}/{len(results)} properties")
        return results

    def _sampled_points(self, job: ExportJob) -> List[RemappedPoint]:
        time_range = TimeRange.for_property(
            job.accessor,
            job.context.frame_duration,
            duration=job.context.comp_duration,
        )
        times, values = sample(
            job.accessor,
            time_range,
            precision=self.config.precision,
            axis=job.axis,
            max_samples=self.config.max_samples,
        )
        return [RemappedPoint(time=t, value=v) for t, v in zip(times, values)]

    def _remap(self, points: List[RemappedPoint], job: ExportJob) -> List[RemappedPoint]:
        remapper = self.remappers[job.destination]
        remapped = []
        for point in points:
            value = remapper.remap(point.value, job.kind, job.context, job.axis)
            if isinstance(value, tuple):
                raise ParameterError(
                    f"'{job.name}' has a vector value; choose an axis",
                    parameter_name="axis",
                    parameter_value=job.axis,
                )
            # Handle fractions are relative to the segment delta, so they
            # carry over unchanged through affine rules
            remapped.append(RemappedPoint(
                time=point.time,
                value=value,
                tangent_in=point.tangent_in,
                tangent_out=point.tangent_out,
                hold=point.hold,
            ))
        return remapped

    def _emit(self, points: List[RemappedPoint], job: ExportJob) -> str:
        context = job.context
        emitter = self.emitters[job.destination]
        if job.destination is Destination.FUSION:
            frame_offset = round_half_up(context.display_start_time / context.frame_duration)
            if job.template:
                in_point = read_accessor(job.accessor, "in_point")
                frame_offset -= round_half_up(in_point / context.frame_duration)
            return emitter.emit(points, frame_duration=context.frame_duration, frame_offset=frame_offset)
        return emitter.emit(
            points,
            kind=job.kind,
            ease_high=context.ease_high,
            display_start_time=self._motion_start(job),
        )

    def _motion_start(self, job: ExportJob) -> float:
        """Offset added to keypoint times; templates start at the layer in point."""
        if job.template:
            # Template clones drop the display start along with the in point
            return -read_accessor(job.accessor, "in_point")
        return job.context.display_start_time


def _has_hold_keys(prop: PropertyAccessor) -> bool:
    for index in range(read_accessor(prop, "keyframe_count")):
        if (
            read_accessor(prop, "in_interpolation", index) is InterpolationType.HOLD
            or read_accessor(prop, "out_interpolation", index) is InterpolationType.HOLD
        ):
            return True
    return False


def export_property(
    accessor: PropertyAccessor,
    kind: PropertyKind = PropertyKind.VALUE,
    destination: Destination = Destination.FUSION,
    context: Optional[GeometryContext] = None,
    axis: Optional[int] = None,
) -> str:
    """
    Convenience function to export one property with default settings.

    Returns:
        Emitted text fragment
    """
    job = ExportJob(
        name=accessor.name,
        accessor=accessor,
        kind=kind,
        destination=destination,
        context=context or GeometryContext(),
        axis=axis,
    )
    return PropertyExporter().export(job)


__all__ = [
    "Destination",
    "ExportConfig",
    "ExportJob",
    "ExportResult",
    "PropertyExporter",
    "points_from_segments",
    "export_property",
]
