"""
Tests for the binary codec.

Malformed input must always surface as DecodeError, never as a raw
struct/Unicode error, and never produce a partially built document.
"""

import pytest

from geco.engine.codec import (
    FLAG_HAS_Z,
    FORMAT_VERSION,
    MAGIC,
    BinaryWriter,
    decode_document,
    encode_document,
)
from geco.models.enums import FeatureType
from geco.models.domain import Feature
from geco.models.errors import DecodeError, EncodeError
from geco.models.vector import Vec3


def _header(w: BinaryWriter, name="raw", total_frames=10, features=1):
    w.raw(MAGIC)
    w.u16(FORMAT_VERSION)
    w.string(name)
    w.i32(total_frames)
    w.u32(features)


def _feature_head(w: BinaryWriter, feature_id="f", type_code=1, paths=1):
    w.string(feature_id)
    w.string("Feature")
    w.u8(type_code)
    w.i32(0)
    w.i32(10)
    w.u32(paths)


def _empty_tail(w: BinaryWriter):
    w.u32(0)  # snapshots
    w.u32(0)  # properties


def _single_keyframe_doc(flags, coords, frame=0):
    w = BinaryWriter()
    _header(w)
    _feature_head(w)
    w.string("p")
    w.u32(1)
    w.i32(frame)
    w.u8(flags)
    for c in coords:
        w.f64(c)
    _empty_tail(w)
    return w.getvalue()


class TestRoundTrip:

    def test_document_survives_encode_decode(self, polygon_engine):
        polygon_engine.set_feature_property("square", "color", "#ff8800")
        polygon_engine.set_animation_name("Équateur ✓")

        decoded = decode_document(polygon_engine.encode())

        assert decoded.name == "Équateur ✓"
        assert decoded.total_frames == 100
        feature = decoded.features[0]
        assert feature.feature_type == FeatureType.POLYGON
        assert feature.point_ids() == ["p1", "p2", "p3", "p4"]
        assert feature.paths["p1"].frames() == [0, 10]
        assert feature.paths["p1"].keyframes[1].position == Vec3(0.0, 0.0, 1.0)
        assert feature.properties == {"color": "#ff8800"}
        assert [s.frame for s in feature.snapshots] == [0]

    def test_empty_document(self, engine):
        decoded = decode_document(engine.encode())
        assert decoded.features == []
        assert decoded.name == "Untitled Animation"

    def test_header(self, engine):
        data = engine.encode()
        assert data[:4] == b"GECO"
        assert data[4:6] == (1).to_bytes(2, "little")


class TestKeyframeFlags:

    def test_missing_z_defaults_to_zero_then_normalizes(self):
        doc = decode_document(_single_keyframe_doc(0, (3.0, 4.0)))

        position = doc.features[0].paths["p"].keyframes[0].position
        assert position.x == pytest.approx(0.6)
        assert position.y == pytest.approx(0.8)
        assert position.z == 0.0

    def test_present_z_is_normalized(self):
        doc = decode_document(_single_keyframe_doc(FLAG_HAS_Z, (0.0, 0.0, 5.0)))
        assert doc.features[0].paths["p"].keyframes[0].position == Vec3(0.0, 0.0, 1.0)

    def test_unknown_flag_bits_rejected(self):
        with pytest.raises(DecodeError):
            decode_document(_single_keyframe_doc(0x02, (1.0, 0.0)))

    def test_zero_position_rejected(self):
        with pytest.raises(DecodeError):
            decode_document(_single_keyframe_doc(FLAG_HAS_Z, (0.0, 0.0, 0.0)))

    def test_huge_coordinates_still_unit(self):
        doc = decode_document(_single_keyframe_doc(FLAG_HAS_Z, (1e200, 0.0, 1e200)))
        position = doc.features[0].paths["p"].keyframes[0].position

        assert position.is_unit()
        assert position.x == pytest.approx(position.z)


class TestMalformedInput:

    def test_empty_buffer(self):
        with pytest.raises(DecodeError):
            decode_document(b"")

    def test_bad_magic(self, polygon_engine):
        data = polygon_engine.encode()
        with pytest.raises(DecodeError) as exc_info:
            decode_document(b"NOPE" + data[4:])
        assert exc_info.value.details["offset"] == 0

    def test_unsupported_version(self, polygon_engine):
        data = polygon_engine.encode()
        with pytest.raises(DecodeError):
            decode_document(data[:4] + (2).to_bytes(2, "little") + data[6:])

    def test_every_truncation_rejected(self, polygon_engine):
        data = polygon_engine.encode()
        for size in range(len(data)):
            with pytest.raises(DecodeError):
                decode_document(data[:size])

    def test_trailing_bytes_rejected(self, polygon_engine):
        with pytest.raises(DecodeError):
            decode_document(polygon_engine.encode() + b"\x00")

    def test_non_positive_total_frames(self):
        w = BinaryWriter()
        _header(w, total_frames=0, features=0)
        with pytest.raises(DecodeError):
            decode_document(w.getvalue())

    def test_unknown_feature_type(self):
        w = BinaryWriter()
        _header(w)
        _feature_head(w, type_code=7, paths=0)
        _empty_tail(w)
        with pytest.raises(DecodeError):
            decode_document(w.getvalue())

    def test_duplicate_feature_ids(self):
        w = BinaryWriter()
        _header(w, features=2)
        for _ in range(2):
            _feature_head(w, feature_id="same", paths=0)
            _empty_tail(w)
        with pytest.raises(DecodeError):
            decode_document(w.getvalue())

    def test_unsorted_keyframes(self):
        w = BinaryWriter()
        _header(w)
        _feature_head(w)
        w.string("p")
        w.u32(2)
        for frame in (5, 2):
            w.i32(frame)
            w.u8(FLAG_HAS_Z)
            w.f64(1.0)
            w.f64(0.0)
            w.f64(0.0)
        _empty_tail(w)
        with pytest.raises(DecodeError):
            decode_document(w.getvalue())

    def test_duplicate_snapshot_frames(self):
        w = BinaryWriter()
        _header(w)
        _feature_head(w, paths=0)
        w.u32(2)
        for _ in range(2):
            w.i32(3)
            w.u32(0)
        w.u32(0)
        with pytest.raises(DecodeError):
            decode_document(w.getvalue())

    def test_invalid_utf8(self):
        w = BinaryWriter()
        w.raw(MAGIC)
        w.u16(FORMAT_VERSION)
        w.u32(2)
        w.raw(b"\xff\xfe")
        w.i32(10)
        w.u32(0)
        with pytest.raises(DecodeError):
            decode_document(w.getvalue())

    def test_absurd_count_rejected_without_allocating(self):
        w = BinaryWriter()
        _header(w, features=0xFFFFFFFF)
        with pytest.raises(DecodeError):
            decode_document(w.getvalue())



class TestUnencodableDocument:
    """Values the wire format cannot hold raise EncodeError, not struct/Unicode errors."""

    def test_total_frames_beyond_i32(self, engine):
        engine.document.total_frames = 2 ** 31

        with pytest.raises(EncodeError) as exc_info:
            engine.encode()
        assert exc_info.value.code == "ENCODE_ERROR"

    def test_feature_frame_beyond_i32(self, engine):
        engine.document.features.append(Feature(
            feature_id="far",
            name="far",
            feature_type=FeatureType.POINT,
            appearance_frame=0,
            disappearance_frame=2 ** 40,
        ))

        with pytest.raises(EncodeError):
            encode_document(engine.document)

    def test_lone_surrogate_in_name(self, engine):
        engine.set_animation_name("bad\ud800")

        with pytest.raises(EncodeError):
            engine.encode()

    def test_lone_surrogate_in_property(self, polygon_engine):
        polygon_engine.set_feature_property("square", "label", "\udfff")

        with pytest.raises(EncodeError):
            polygon_engine.encode()

    @pytest.mark.parametrize("method, value", [
        ("u8", 256),
        ("u16", -1),
        ("u32", 2 ** 32),
        ("i32", -2 ** 31 - 1),
    ])
    def test_writer_rejects_out_of_range(self, method, value):
        with pytest.raises(EncodeError):
            getattr(BinaryWriter(), method)(value)

    def test_i32_bounds_accepted(self):
        w = BinaryWriter()
        w.i32(-2 ** 31)
        w.i32(2 ** 31 - 1)
        assert len(w.getvalue()) == 8
