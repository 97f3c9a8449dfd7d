"""
Codec - binary encode/decode of a whole AnimationDocument

Layout (little-endian):

    header    : b"GECO", u16 version
    string    : u32 byte length, UTF-8 bytes
    document  : string name, i32 total_frames, u32 n, n × feature
    feature   : string id, string name, u8 type code,
                i32 appearance, i32 disappearance,
                u32 n, n × path, u32 m, m × snapshot,
                u32 k, k × (string key, string value)
    path      : string point_id, u32 n, n × keyframe
    keyframe  : i32 frame, u8 flags, f64 x, f64 y, [f64 z if flags & 1]
    snapshot  : i32 frame, u32 n, n × string point_id

decode_document() builds a brand-new document and validates every model
invariant before returning it, so a caller can swap it in atomically.
"""

import struct
from typing import Dict, List, Set

from geco.models.domain import (
    AnimationDocument,
    Feature,
    FeatureStructureSnapshot,
    PointAnimationPath,
    PositionKeyframe,
)
from geco.models.enums import FeatureType, LogCategory
from geco.models.errors import DecodeError, EncodeError, InvalidPosition
from geco.models.vector import Vec3
from geco.utils.logger import get_logger

log = get_logger().for_category(LogCategory.CODEC)

MAGIC = b"GECO"
FORMAT_VERSION = 1

FLAG_HAS_Z = 0x01

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_F64 = struct.Struct("<d")


# =====================================================================
# Writer
# =====================================================================

class BinaryWriter:
    """
    Append-only little-endian buffer.

    Values that do not fit their field (out-of-range integers, strings that
    are not encodable as UTF-8) raise EncodeError.
    """

    def __init__(self):
        self._buf = bytearray()

    def _pack(self, fmt: struct.Struct, value) -> None:
        try:
            self._buf += fmt.pack(value)
        except struct.error as ex:
            raise EncodeError(f"{value!r} does not fit field '{fmt.format}' ({ex})")

    def raw(self, data: bytes) -> None:
        self._buf += data

    def u8(self, value: int) -> None:
        self._pack(_U8, value)

    def u16(self, value: int) -> None:
        self._pack(_U16, value)

    def u32(self, value: int) -> None:
        self._pack(_U32, value)

    def i32(self, value: int) -> None:
        self._pack(_I32, value)

    def f64(self, value: float) -> None:
        self._pack(_F64, value)

    def string(self, value: str) -> None:
        try:
            data = value.encode("utf-8")
        except UnicodeEncodeError as ex:
            raise EncodeError(f"string {value!r} is not encodable as UTF-8 ({ex.reason})")
        self.u32(len(data))
        self._buf += data

    def getvalue(self) -> bytes:
        return bytes(self._buf)


# =====================================================================
# Reader
# =====================================================================

class BinaryReader:
    """
    Bounds-checked cursor over a byte buffer.

    Every read failure (truncation, bad UTF-8, absurd counts) becomes a
    DecodeError carrying the offset where it happened.
    """

    def __init__(self, data: bytes):
        self._data = bytes(data)
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self.offset

    def _unpack(self, fmt: struct.Struct, what: str):
        try:
            (value,) = fmt.unpack_from(self._data, self.offset)
        except struct.error:
            raise DecodeError(f"truncated data while reading {what}", self.offset)
        self.offset += fmt.size
        return value

    def raw(self, size: int, what: str) -> bytes:
        if size > self.remaining:
            raise DecodeError(f"truncated data while reading {what}", self.offset)
        chunk = self._data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def u8(self, what: str) -> int:
        return self._unpack(_U8, what)

    def u16(self, what: str) -> int:
        return self._unpack(_U16, what)

    def u32(self, what: str) -> int:
        return self._unpack(_U32, what)

    def i32(self, what: str) -> int:
        return self._unpack(_I32, what)

    def f64(self, what: str) -> float:
        return self._unpack(_F64, what)

    def count(self, what: str, min_item_size: int) -> int:
        """Read a u32 element count and reject counts the buffer cannot hold"""
        start = self.offset
        n = self.u32(what)
        if n * min_item_size > self.remaining:
            raise DecodeError(f"{what} count {n} exceeds remaining data", start)
        return n

    def string(self, what: str) -> str:
        start = self.offset
        size = self.u32(what)
        data = self.raw(size, what)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            raise DecodeError(f"invalid UTF-8 in {what}", start)


# =====================================================================
# Encoding
# =====================================================================

def _write_path(w: BinaryWriter, path: PointAnimationPath) -> None:
    w.string(path.point_id)
    w.u32(len(path.keyframes))
    for keyframe in path.keyframes:
        w.i32(keyframe.frame)
        w.u8(FLAG_HAS_Z)
        w.f64(keyframe.position.x)
        w.f64(keyframe.position.y)
        w.f64(keyframe.position.z)


def _write_feature(w: BinaryWriter, feature: Feature) -> None:
    w.string(feature.feature_id)
    w.string(feature.name)
    w.u8(feature.feature_type.value)
    w.i32(feature.appearance_frame)
    w.i32(feature.disappearance_frame)

    w.u32(len(feature.paths))
    for path in feature.paths.values():
        _write_path(w, path)

    w.u32(len(feature.snapshots))
    for snapshot in feature.snapshots:
        w.i32(snapshot.frame)
        w.u32(len(snapshot.point_ids))
        for point_id in snapshot.point_ids:
            w.string(point_id)

    w.u32(len(feature.properties))
    for key, value in feature.properties.items():
        w.string(key)
        w.string(value)


def encode_document(document: AnimationDocument) -> bytes:
    """
    Serialize the whole document.

    Raises:
        EncodeError: a value does not fit its wire field
    """
    w = BinaryWriter()
    w.raw(MAGIC)
    w.u16(FORMAT_VERSION)
    w.string(document.name)
    w.i32(document.total_frames)

    w.u32(len(document.features))
    for feature in document.features:
        _write_feature(w, feature)

    data = w.getvalue()
    log.debug("Encoded document", name=document.name, features=len(document.features), size=len(data))
    return data


# =====================================================================
# Decoding
# =====================================================================

# Smallest encoded sizes, used to sanity-check element counts
_MIN_STRING = 4
_MIN_KEYFRAME = 4 + 1 + 8 + 8
_MIN_PATH = _MIN_STRING + 4
_MIN_SNAPSHOT = 4 + 4
_MIN_PROPERTY = 2 * _MIN_STRING
_MIN_FEATURE = 2 * _MIN_STRING + 1 + 4 + 4 + 3 * 4


def _read_keyframe(r: BinaryReader) -> PositionKeyframe:
    start = r.offset
    frame = r.i32("keyframe frame")
    flags = r.u8("keyframe flags")
    if flags & ~FLAG_HAS_Z:
        raise DecodeError(f"unknown keyframe flags 0x{flags:02x}", start)

    x = r.f64("position x")
    y = r.f64("position y")
    z = r.f64("position z") if flags & FLAG_HAS_Z else 0.0

    try:
        position = Vec3.unit(x, y, z)
    except InvalidPosition as ex:
        raise DecodeError(ex.message, start)

    return PositionKeyframe(frame=frame, position=position)


def _read_path(r: BinaryReader) -> PointAnimationPath:
    point_id = r.string("point id")
    keyframes: List[PositionKeyframe] = []

    for _ in range(r.count("keyframe", _MIN_KEYFRAME)):
        start = r.offset
        keyframe = _read_keyframe(r)
        if keyframes and keyframe.frame <= keyframes[-1].frame:
            raise DecodeError(f"keyframes of point '{point_id}' are not strictly ascending", start)
        keyframes.append(keyframe)

    return PointAnimationPath(point_id=point_id, keyframes=keyframes)


def _read_snapshot(r: BinaryReader) -> FeatureStructureSnapshot:
    frame = r.i32("snapshot frame")
    point_ids = [r.string("snapshot point id") for _ in range(r.count("snapshot point", _MIN_STRING))]
    return FeatureStructureSnapshot(frame=frame, point_ids=point_ids)


def _read_feature(r: BinaryReader) -> Feature:
    feature_id = r.string("feature id")
    name = r.string("feature name")

    type_offset = r.offset
    type_code = r.u8("feature type")
    try:
        feature_type = FeatureType.from_code(type_code)
    except ValueError:
        raise DecodeError(f"unknown feature type code {type_code}", type_offset)

    appearance = r.i32("appearance frame")
    disappearance = r.i32("disappearance frame")

    paths: Dict[str, PointAnimationPath] = {}
    for _ in range(r.count("path", _MIN_PATH)):
        start = r.offset
        path = _read_path(r)
        if path.point_id in paths:
            raise DecodeError(f"duplicate point id '{path.point_id}' in feature '{feature_id}'", start)
        paths[path.point_id] = path

    snapshots: List[FeatureStructureSnapshot] = []
    for _ in range(r.count("snapshot", _MIN_SNAPSHOT)):
        start = r.offset
        snapshot = _read_snapshot(r)
        if snapshots and snapshot.frame <= snapshots[-1].frame:
            raise DecodeError(f"snapshots of feature '{feature_id}' are not strictly ascending", start)
        snapshots.append(snapshot)

    properties: Dict[str, str] = {}
    for _ in range(r.count("property", _MIN_PROPERTY)):
        key = r.string("property key")
        properties[key] = r.string("property value")

    return Feature(
        feature_id=feature_id,
        name=name,
        feature_type=feature_type,
        appearance_frame=appearance,
        disappearance_frame=disappearance,
        paths=paths,
        snapshots=snapshots,
        properties=properties,
    )


def decode_document(data: bytes) -> AnimationDocument:
    """
    Parse and validate an encoded document

    Args:
        data: Bytes produced by encode_document()

    Returns:
        A new AnimationDocument

    Raises:
        DecodeError: data is malformed or violates a model invariant
    """
    r = BinaryReader(data)

    if r.raw(len(MAGIC), "header") != MAGIC:
        raise DecodeError("bad magic header", 0)

    version = r.u16("format version")
    if version != FORMAT_VERSION:
        raise DecodeError(f"unsupported format version {version}", len(MAGIC))

    name = r.string("animation name")

    frames_offset = r.offset
    total_frames = r.i32("total frames")
    if total_frames <= 0:
        raise DecodeError(f"total frames must be positive, got {total_frames}", frames_offset)

    features: List[Feature] = []
    seen_ids: Set[str] = set()
    for _ in range(r.count("feature", _MIN_FEATURE)):
        start = r.offset
        feature = _read_feature(r)
        if feature.feature_id in seen_ids:
            raise DecodeError(f"duplicate feature id '{feature.feature_id}'", start)
        seen_ids.add(feature.feature_id)
        features.append(feature)

    if r.remaining:
        raise DecodeError(f"{r.remaining} trailing bytes after document", r.offset)

    log.debug("Decoded document", name=name, features=len(features), size=len(data))
    return AnimationDocument(name=name, total_frames=total_frames, features=features)
