"""
Integration Tests for the Property Exporter

Run with: pytest tests/test_exporter.py -v
"""

import logging

import pytest
from curveport import (
    AccessorFailure,
    Destination,
    Ease,
    ExportConfig,
    ExportJob,
    GeometryContext,
    InterpolationType,
    KeyframedProperty,
    ParameterError,
    PropertyExporter,
    PropertyKind,
    RemapError,
    Shape,
    ValueType,
    build_curve,
    export_property,
    points_from_segments,
)

FRAME = 1 / 30


@pytest.fixture
def exporter():
    return PropertyExporter()


@pytest.fixture
def opacity():
    prop = KeyframedProperty("Opacity", ValueType.ONE_D)
    prop.add_keyframe(0.0, 0.0, ease_out=(Ease(33.333333, 100.0),))
    prop.add_keyframe(1.0, 100.0, ease_in=(Ease(33.333333, 100.0),))
    return prop


@pytest.fixture
def linear_ramp():
    prop = KeyframedProperty("Opacity", ValueType.ONE_D)
    prop.add_keyframe(0.0, 0.0, out_interpolation=InterpolationType.LINEAR)
    prop.add_keyframe(1.0, 100.0, in_interpolation=InterpolationType.LINEAR)
    return prop


def _job(prop, kind=PropertyKind.PERCENT, destination=Destination.MOTION, **kwargs):
    return ExportJob(name=prop.name, accessor=prop, kind=kind, destination=destination, **kwargs)


class TestRouting:
    """Tests for curve versus sampled routing."""

    def test_motion_keyed_uses_curves(self, exporter, opacity):
        assert exporter.uses_curves(_job(opacity))

    def test_fusion_always_sampled(self, exporter, opacity):
        assert not exporter.uses_curves(_job(opacity, destination=Destination.FUSION))

    def test_expression_sampled(self, exporter, opacity):
        opacity.expression = lambda t: t * 100
        assert not exporter.uses_curves(_job(opacity))

    def test_hold_keys_sampled(self, exporter):
        prop = KeyframedProperty("Opacity")
        prop.add_keyframe(0.0, 0.0, out_interpolation=InterpolationType.HOLD)
        prop.add_keyframe(1.0, 100.0)
        assert not exporter.uses_curves(_job(prop))

    def test_single_key_sampled(self, exporter):
        prop = KeyframedProperty("Opacity")
        prop.add_keyframe(0.0, 50.0)
        assert not exporter.uses_curves(_job(prop))

    def test_curves_disabled_by_config(self, opacity):
        exporter = PropertyExporter(ExportConfig(prefer_curves=False))
        assert not exporter.uses_curves(_job(opacity))


class TestMotionExport:
    """Tests for end-to-end Motion output."""

    def test_eased_keys(self, exporter, opacity):
        text = exporter.export(_job(opacity))

        assert "<time>0 153600 1 0</time>" in text
        assert "<time>153600 153600 1 0</time>" in text
        assert "<value>0</value>" in text
        assert "<value>1</value>" in text
        assert "<outputTangentTime>0.333</outputTangentTime>" in text

    def test_spatial_position_axis(self, exporter):
        prop = KeyframedProperty("Position", ValueType.TWO_D_SPATIAL)
        prop.add_keyframe(0.0, (0.0, 0.0))
        prop.add_keyframe(2.0, (1920.0, 1080.0))

        text = exporter.export(_job(prop, kind=PropertyKind.POSITION, axis=1))

        assert "<value>540</value>" in text
        assert "<value>-540</value>" in text

    def test_sampled_hold(self, exporter):
        prop = KeyframedProperty("Opacity")
        prop.add_keyframe(0.0, 0.0, out_interpolation=InterpolationType.HOLD)
        prop.add_keyframe(0.5, 100.0)

        text = exporter.export(_job(prop))

        assert "Tangent" not in text
        assert "<value>0</value>" in text
        assert "<value>1</value>" in text

    def test_display_start(self, exporter, opacity):
        context = GeometryContext(display_start_time=2.0)
        text = exporter.export(_job(opacity, context=context))
        assert "<time>307200 153600 1 0</time>" in text

    def test_template_relative_to_in_point(self, exporter):
        prop = KeyframedProperty("Opacity", in_point=1.0)
        prop.add_keyframe(1.0, 0.0, ease_out=(Ease(33.333333, 100.0),))
        prop.add_keyframe(2.0, 100.0, ease_in=(Ease(33.333333, 100.0),))
        context = GeometryContext(display_start_time=0.5)

        text = exporter.export(_job(prop, context=context, template=True))

        assert "<time>0 153600 1 0</time>" in text
        assert "<time>153600 153600 1 0</time>" in text

    def test_template_sampled_path(self, exporter):
        prop = KeyframedProperty("Opacity", in_point=2.0, static_value=50.0)

        text = exporter.export(_job(prop, template=True))

        assert "<time>0 153600 1 0</time>" in text


class TestFusionExport:
    """Tests for end-to-end Fusion output."""

    def test_key_at_frame_30(self, exporter, linear_ramp):
        lines = exporter.export(_job(linear_ramp, destination=Destination.FUSION)).splitlines()

        assert lines[0] == "[0] = { 0.0000000000, Flags = { StepIn = true } },"
        assert lines[-1] == "[30] = { 1.0000000000, Flags = { StepIn = true } },"
        assert len(lines) == 31

    def test_static_value(self, exporter):
        prop = KeyframedProperty("Blur", static_value=5.0)

        text = exporter.export(_job(prop, kind=PropertyKind.VALUE, destination=Destination.FUSION))

        assert text == "[0] = { 5.0000000000, Flags = { StepIn = true } },\n"

    def test_display_start_offset(self, exporter):
        prop = KeyframedProperty("Blur", static_value=5.0)
        context = GeometryContext(display_start_time=1.0)

        text = exporter.export(_job(prop, destination=Destination.FUSION, context=context))

        assert text.startswith("[30] = ")

    def test_template_relative_to_in_point(self, exporter):
        prop = KeyframedProperty("Blur", static_value=5.0, in_point=1.0)

        text = exporter.export(_job(prop, destination=Destination.FUSION, template=True))

        assert text.startswith("[0] = ")

    def test_expression_capped_by_comp_duration(self, exporter):
        prop = KeyframedProperty("Opacity", expression=lambda t: t * 30, out_point=10.0)
        context = GeometryContext(comp_duration=1.0)

        lines = exporter.export(_job(prop, destination=Destination.FUSION, context=context)).splitlines()

        assert len(lines) == 31
        assert lines[-1].startswith("[30] = ")

    def test_indent_config(self):
        exporter = PropertyExporter(ExportConfig(indent="\t\t\t"))
        prop = KeyframedProperty("Blur", static_value=1.0)

        text = exporter.export(_job(prop, destination=Destination.FUSION))

        assert text.startswith("\t\t\t[0] = ")

    def test_export_property_shortcut(self, linear_ramp):
        text = export_property(linear_ramp, PropertyKind.PERCENT)
        assert "StepIn" in text


class TestExportAll:
    """Tests for per-property failure isolation."""

    def test_failures_isolated(self, exporter, opacity, caplog):
        def broken(t):
            raise RuntimeError("layer deleted")

        shape = Shape(vertices=((0.0, 0.0),), in_tangents=((0.0, 0.0),), out_tangents=((0.0, 0.0),))
        jobs = [
            _job(opacity),
            _job(KeyframedProperty("Broken", expression=broken)),
            _job(KeyframedProperty("Path", ValueType.SHAPE, static_value=shape)),
            _job(KeyframedProperty("Scale", ValueType.TWO_D, static_value=(100.0, 100.0))),
            _job(opacity, destination=Destination.FUSION),
        ]

        with caplog.at_level(logging.WARNING, logger="curveport"):
            results = exporter.export_all(jobs)

        assert [r.ok for r in results] == [True, False, False, False, True]
        assert isinstance(results[1].error, AccessorFailure)
        assert isinstance(results[2].error, RemapError)
        assert isinstance(results[3].error, ParameterError)
        assert results[0].text == exporter.export(jobs[0])
        assert "Broken" in caplog.text

    def test_host_error_on_keyframe_read(self, exporter, opacity):
        class ClosedProject(KeyframedProperty):
            def keyframe_value(self, index):
                raise RuntimeError("object is invalid")

        stale = ClosedProject("Stale", keyframes=list(opacity.keyframes))

        results = exporter.export_all([_job(stale), _job(opacity)])

        assert [r.ok for r in results] == [False, True]
        assert isinstance(results[0].error, AccessorFailure)
        assert isinstance(results[0].error.__cause__, RuntimeError)

    def test_names_preserved(self, exporter, opacity):
        results = exporter.export_all([_job(opacity), _job(opacity, destination=Destination.FUSION)])
        assert [r.name for r in results] == ["Opacity", "Opacity"]

    def test_export_is_idempotent(self, exporter, opacity):
        assert exporter.export(_job(opacity)) == exporter.export(_job(opacity))


class TestPointsFromSegments:
    """Tests for curve to point conversion."""

    def test_handles_attached(self, opacity):
        points = points_from_segments(build_curve(opacity))

        assert points[0].tangent_in is None
        assert points[0].tangent_out == pytest.approx((0.333, 0.333))
        assert points[1].tangent_in == pytest.approx((0.667, 0.667))
        assert points[1].tangent_out is None

    def test_hold_marked(self):
        prop = KeyframedProperty("Value")
        prop.add_keyframe(0.0, 1.0, out_interpolation=InterpolationType.HOLD)
        prop.add_keyframe(1.0, 2.0)
        prop.add_keyframe(2.0, 3.0)

        points = points_from_segments(build_curve(prop))

        assert points[0].hold
        assert not points[0].has_handles
        assert points[1].tangent_in is None
        assert points[1].tangent_out is not None

    def test_vector_needs_axis(self):
        prop = KeyframedProperty("Scale", ValueType.TWO_D)
        prop.add_keyframe(0.0, (0.0, 0.0))
        prop.add_keyframe(1.0, (100.0, 50.0))

        with pytest.raises(ParameterError):
            points_from_segments(build_curve(prop))
        assert points_from_segments(build_curve(prop), axis=1)[1].value == 50.0


class TestExportConfig:
    """Tests for config serialization."""

    def test_defaults(self):
        config = ExportConfig()
        assert config.precision == 3
        assert config.timebase == 153600

    def test_dict_ignores_unknown_keys(self):
        config = ExportConfig.from_dict({"precision": 1, "legacy": True})
        assert config.precision == 1

    def test_save_load(self, tmp_path):
        path = tmp_path / "export.json"
        ExportConfig(precision=1, indent="  ").save(path)

        loaded = ExportConfig.load(path)

        assert loaded == ExportConfig(precision=1, indent="  ")
