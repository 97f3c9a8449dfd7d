"""
Engine error kinds

Every anticipated misuse of the engine raises one of these. They all share
the GecoError base so callers (and the API exception handler) can catch the
whole family in one place. Each error carries:
- code: machine-readable identifier (stable, used in API responses)
- message: human-readable description
- details: extra context (ids, frames, offending values)
"""

from typing import Any, Dict, Optional


class GecoError(Exception):
    """Base class for all engine errors"""

    code: str = "GECO_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidFeatureType(GecoError):
    """Type code does not map to Point, Polyline or Polygon"""
    code = "INVALID_FEATURE_TYPE"

    def __init__(self, type_code: Any):
        super().__init__(
            f"Invalid feature type '{type_code}'",
            details={"type_code": type_code, "valid_codes": [0, 1, 2]},
        )


class NoActiveFeature(GecoError):
    """Point insertion without a feature id while no feature is active"""
    code = "NO_ACTIVE_FEATURE"

    def __init__(self):
        super().__init__("No active feature. Create a feature first.")


class DuplicatePointId(GecoError):
    """Point id already used inside the target feature"""
    code = "DUPLICATE_POINT_ID"

    def __init__(self, feature_id: str, point_id: str):
        super().__init__(
            f"Point '{point_id}' already exists in feature '{feature_id}'",
            details={"feature_id": feature_id, "point_id": point_id},
        )


class DuplicateFeatureId(GecoError):
    """Explicit feature id already used in the document"""
    code = "DUPLICATE_FEATURE_ID"

    def __init__(self, feature_id: str):
        super().__init__(
            f"Feature '{feature_id}' already exists",
            details={"feature_id": feature_id},
        )


class FeatureNotFound(GecoError):
    code = "FEATURE_NOT_FOUND"

    def __init__(self, feature_id: str):
        super().__init__(
            f"Feature '{feature_id}' not found",
            details={"feature_id": feature_id},
        )


class PointNotFound(GecoError):
    code = "POINT_NOT_FOUND"

    def __init__(self, feature_id: str, point_id: str):
        super().__init__(
            f"Point '{point_id}' not found in feature '{feature_id}'",
            details={"feature_id": feature_id, "point_id": point_id},
        )


class InvalidPosition(GecoError):
    """Position cannot be projected onto the unit sphere (zero-length or non-finite)"""
    code = "INVALID_POSITION"

    def __init__(self, x: float, y: float, z: float, reason: str = "zero-length vector"):
        super().__init__(
            f"Cannot normalize position ({x}, {y}, {z}): {reason}",
            details={"x": x, "y": y, "z": z, "reason": reason},
        )


class InvalidTotalFrames(GecoError):
    code = "INVALID_TOTAL_FRAMES"

    def __init__(self, total_frames: Any):
        super().__init__(
            f"Total frames must be an integer from 1 to 2147483647, got {total_frames}",
            details={"total_frames": total_frames},
        )


class FrameOutOfRange(GecoError):
    """Frame does not fit the signed 32-bit range the document stores"""
    code = "FRAME_OUT_OF_RANGE"

    def __init__(self, field: str, frame: Any):
        super().__init__(
            f"{field} must be an integer in the 32-bit frame range, got {frame}",
            details={"field": field, "frame": frame},
        )


class EncodeError(GecoError):
    """Document holds a value the binary format cannot represent"""
    code = "ENCODE_ERROR"

    def __init__(self, reason: str):
        super().__init__(f"Failed to encode animation: {reason}", details={"reason": reason})


class DecodeError(GecoError):
    """Byte buffer is not a valid encoded document"""
    code = "DECODE_ERROR"

    def __init__(self, reason: str, offset: Optional[int] = None):
        details: Dict[str, Any] = {"reason": reason}
        if offset is not None:
            details["offset"] = offset
        super().__init__(f"Failed to decode animation: {reason}", details=details)


class BlobNotFound(GecoError):
    """Blob missing, or owned by someone else (reported the same way)"""
    code = "BLOB_NOT_FOUND"

    def __init__(self, blob_id: str):
        super().__init__(
            f"Animation '{blob_id}' not found or access denied",
            details={"blob_id": blob_id},
        )


class BlobTooLarge(GecoError):
    code = "BLOB_TOO_LARGE"

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"Animation data is {size} bytes, limit is {limit}",
            details={"size": size, "limit": limit},
        )
