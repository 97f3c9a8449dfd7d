"""
End-to-end tests of the AnimationEngine facade: authoring, playback,
and codec behavior through one engine instance.
"""

import math

import pytest

from geco.engine.animation_engine import AnimationEngine
from geco.models.enums import FeatureType
from geco.models.errors import (
    DecodeError,
    FeatureNotFound,
    InvalidFeatureType,
    InvalidPosition,
    NoActiveFeature,
    PointNotFound,
)

SQRT_HALF = math.sqrt(0.5)


class TestAuthoringScenarios:

    def test_polygon_midpoint_scenario(self, engine):
        """Polygon point keyframed from +X to +Z renders at the arc midpoint."""
        fid = engine.create_feature("tri", 2, 0, 100)
        engine.add_point(fid, "p1", 0, 1, 0, 0)
        engine.add_point(fid, "p2", 0, 0, 1, 0)
        engine.add_point(fid, "p3", 0, 0, 0, -1)
        engine.add_position_keyframe_to_point(fid, "p1", 10, 0, 0, 1)

        point = engine.render_features_at_frame(5)[0].points[0]

        assert point.point_id == "p1"
        assert point.x == pytest.approx(SQRT_HALF)
        assert point.z == pytest.approx(SQRT_HALF)

    def test_structure_evolves_with_added_points(self, engine):
        fid = engine.create_feature("line", FeatureType.POLYLINE, 0, 100)
        engine.add_point(fid, "p1", 0, 1, 0, 0)
        engine.add_point(fid, "p2", 5, 0, 1, 0)

        assert engine.resolve_structure(fid, 3) == ["p1"]
        assert engine.resolve_structure(fid, 7) == ["p1", "p2"]
        assert engine.resolve_structure(fid, -1) == []

    def test_out_of_order_keyframes(self, engine):
        fid = engine.create_feature("f", FeatureType.POINT, 0, 10)
        engine.add_point(fid, "p", 5, 0, 0, 1)
        engine.add_position_keyframe_to_point(fid, "p", 0, 1, 0, 0)
        engine.add_position_keyframe_to_point(fid, "p", 2, 0, 1, 0)

        path = engine.get_feature(fid).get_path("p")
        assert path.frames() == [0, 2, 5]

    def test_same_frame_keyframe_replaces(self, engine):
        fid = engine.create_feature("f", FeatureType.POINT, 0, 10)
        engine.add_point(fid, "p", 0, 1, 0, 0)
        engine.add_position_keyframe_to_point(fid, "p", 0, 0, 5, 0)

        assert engine.interpolate_point(fid, "p", 0).to_tuple() == (0.0, 1.0, 0.0)

    def test_interpolate_point_clamps(self, polygon_engine):
        assert polygon_engine.interpolate_point("square", "p1", -10).to_tuple() == (1.0, 0.0, 0.0)
        assert polygon_engine.interpolate_point("square", "p1", 50).to_tuple() == (0.0, 0.0, 1.0)

    def test_positions_are_normalized(self, engine):
        fid = engine.create_feature("f", FeatureType.POINT, 0, 10)
        engine.add_point(fid, "p", 0, 10, 0, 0)

        assert engine.interpolate_point(fid, "p", 0).to_tuple() == (1.0, 0.0, 0.0)

    def test_add_point_to_active_feature(self, engine):
        engine.create_feature("a", FeatureType.POINT, 0, 10, feature_id="a")
        engine.create_feature("b", FeatureType.POINT, 0, 10, feature_id="b")

        pid = engine.add_point_to_active_feature(None, 0, 0, 1, 0)

        assert engine.active_feature_id == "b"
        assert engine.get_feature("b").point_ids() == [pid]
        assert engine.get_feature("a").point_ids() == []


class TestErrors:

    def test_invalid_type_code(self, engine):
        with pytest.raises(InvalidFeatureType):
            engine.create_feature("bad", 3, 0, 10)
        assert engine.list_features() == []

    def test_no_active_feature(self, engine):
        with pytest.raises(NoActiveFeature):
            engine.add_point_to_active_feature("p", 0, 1, 0, 0)

    def test_unknown_feature_and_point(self, polygon_engine):
        with pytest.raises(FeatureNotFound):
            polygon_engine.interpolate_point("nope", "p1", 0)
        with pytest.raises(PointNotFound):
            polygon_engine.interpolate_point("square", "nope", 0)
        with pytest.raises(FeatureNotFound):
            polygon_engine.resolve_structure("nope", 0)

    def test_zero_position_leaves_feature_unchanged(self, engine):
        fid = engine.create_feature("f", FeatureType.POINT, 0, 10)
        with pytest.raises(InvalidPosition):
            engine.add_point(fid, "p", 0, 0, 0, 0)

        feature = engine.get_feature(fid)
        assert feature.paths == {}
        assert feature.snapshots == []


class TestCodecThroughEngine:

    def test_round_trip_preserves_rendering(self, polygon_engine):
        copy = AnimationEngine()
        copy.decode(polygon_engine.encode())

        assert copy.to_dict() == polygon_engine.to_dict()
        assert copy.render_line_segments_at_frame(5) == polygon_engine.render_line_segments_at_frame(5)

    def test_decode_moves_active_feature_to_last(self, polygon_engine):
        polygon_engine.create_feature("tail", FeatureType.POINT, 0, 10, feature_id="tail")
        data = polygon_engine.encode()

        other = AnimationEngine()
        other.decode(data)

        assert other.active_feature_id == "tail"

    def test_failed_decode_keeps_default_state(self, engine):
        with pytest.raises(DecodeError):
            engine.decode(b"definitely not an animation")

        assert engine.get_animation_name() == "Untitled Animation"
        assert engine.get_total_frames() == 100
        assert engine.list_features() == []
        assert engine.active_feature_id is None

    def test_failed_decode_keeps_current_document(self, polygon_engine):
        before = polygon_engine.to_dict()
        data = polygon_engine.encode()

        with pytest.raises(DecodeError):
            polygon_engine.decode(data[:-3])

        assert polygon_engine.to_dict() == before
        assert polygon_engine.active_feature_id == "square"

    def test_failed_decode_logged_as_warning(self, engine, log_output):
        with pytest.raises(DecodeError):
            engine.decode(b"")

        assert "Decode rejected" in log_output.getvalue()


class TestDocumentView:

    def test_to_dict_shape(self, polygon_engine):
        data = polygon_engine.to_dict()

        assert data["name"] == "Equator"
        assert data["total_frames"] == 100
        feature = data["features"][0]
        assert feature["type"] == "POLYGON"
        assert feature["type_code"] == 2
        assert [p["point_id"] for p in feature["paths"]] == ["p1", "p2", "p3", "p4"]
        assert feature["snapshots"] == [{"frame": 0, "point_ids": ["p1", "p2", "p3", "p4"]}]
