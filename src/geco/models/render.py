"""
Render output models - boundary records produced per frame.

These are deliberately separate from the document model:

✔ RenderedPoint     - one resolved vertex (id + coordinates)
✔ RenderedFeature   - one visible feature with its ordered vertices
✔ LineSegmentBuffer - flat homogeneous vertex buffer for closed rings

All of them are frozen; the renderer builds fresh instances on every call,
so the display layer never holds a reference into engine state.
"""

from dataclasses import dataclass, field
from typing import Tuple

from geco.models.enums import FeatureType

# Floats per vertex in LineSegmentBuffer.vertex_data: x, y, z, w
FLOATS_PER_VERTEX = 4
# Vertices per segment
VERTICES_PER_SEGMENT = 2


@dataclass(frozen=True)
class RenderedPoint:
    point_id: str
    x: float
    y: float
    z: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class RenderedFeature:
    """A feature as seen at one frame. Points follow the resolved structure order."""
    feature_id: str
    name: str
    feature_type: FeatureType
    points: Tuple[RenderedPoint, ...] = ()


@dataclass(frozen=True)
class LineSegmentBuffer:
    """
    Closed-ring line segments for all visible polygons.

    vertex_data holds segment_count * 2 vertices, each as (x, y, z, 1.0).
    """
    segment_count: int = 0
    vertex_data: Tuple[float, ...] = field(default_factory=tuple)

    def is_empty(self) -> bool:
        return self.segment_count == 0
