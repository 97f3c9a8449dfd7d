"""
Enums for the geco animation engine
"""

from enum import Enum, auto


class FeatureType(Enum):
    """
    Geometric feature kinds.

    Values are the wire/API type codes used by the codec and the HTTP layer.
    """
    POINT = 0       # Single vertex (or loose vertex set)
    POLYLINE = 1    # Open chain of vertices
    POLYGON = 2     # Closed ring of vertices

    @classmethod
    def from_code(cls, code: int) -> 'FeatureType':
        """Map a numeric type code to a FeatureType, raise ValueError if unknown"""
        for member in cls:
            if member.value == code:
                return member
        raise ValueError(f"Unknown feature type code: {code}")


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()         # Configuration loading, validation
    DOCUMENT = auto()       # Document-level changes (name, frame count, replace)
    MUTATION = auto()       # Feature/point/keyframe authoring
    INTERPOLATION = auto()  # Slerp fallbacks and edge cases
    RENDER = auto()         # Per-frame rendering
    CODEC = auto()          # Binary encode/decode
    STORAGE = auto()        # Blob store save/load
    API = auto()            # HTTP layer
    SYSTEM = auto()         # Startup, shutdown

    GENERAL = auto()        # Default general category
