"""
Frame Renderer

Projects the document at one frame into boundary records:

    Document ─┬─ visible features ─ resolve_structure ─┬─ RenderedFeature list
              │                                        │
              └──────── interpolate_point_position ────┴─ LineSegmentBuffer

The renderer only reads the document. Output records are freshly built
frozen objects, never references into the model.
"""

from typing import List

from geco.engine.interpolator import DEFAULT_SLERP_EPSILON, interpolate_point_position
from geco.engine.structure_resolver import resolve_structure
from geco.models.domain import AnimationDocument, Feature
from geco.models.enums import FeatureType, LogCategory
from geco.models.render import LineSegmentBuffer, RenderedFeature, RenderedPoint
from geco.utils.logger import get_logger

log = get_logger().for_category(LogCategory.RENDER)

# Homogeneous coordinate appended to every vertex in segment buffers
HOMOGENEOUS_W = 1.0


class FrameRenderer:
    """
    Stateless per-frame projection of an AnimationDocument.

    The document is passed on every call so the engine can swap it
    (after decode) without rebuilding the renderer.
    """

    def __init__(self, slerp_epsilon: float = DEFAULT_SLERP_EPSILON):
        self.slerp_epsilon = slerp_epsilon

    # ------------------------------------------------------------
    # Point lists
    # ------------------------------------------------------------

    def render_feature(self, feature: Feature, frame: float) -> RenderedFeature:
        """
        Resolve one feature's vertices at `frame` in structure order.

        Points listed in the structure but without a resolvable path are
        skipped; one bad point never fails the whole feature.
        """
        points: List[RenderedPoint] = []

        for point_id in resolve_structure(feature, frame):
            path = feature.get_path(point_id)
            if path is None:
                log.debug("Structure references unknown point, skipping",
                          feature=feature.feature_id, point=point_id)
                continue

            position = interpolate_point_position(path, frame, self.slerp_epsilon)
            if position is None:
                log.debug("Point has no keyframes, skipping",
                          feature=feature.feature_id, point=point_id)
                continue

            points.append(RenderedPoint(point_id, position.x, position.y, position.z))

        return RenderedFeature(
            feature_id=feature.feature_id,
            name=feature.name,
            feature_type=feature.feature_type,
            points=tuple(points),
        )

    def render_features_at_frame(self, document: AnimationDocument, frame: float) -> List[RenderedFeature]:
        """
        All features visible at `frame`, in authoring order.

        Returns an empty list (never None) when nothing is visible.
        """
        rendered = [
            self.render_feature(feature, frame)
            for feature in document.features
            if feature.is_visible_at(frame)
        ]
        log.debug(f"Rendered frame {frame}", features=len(rendered))
        return rendered

    # ------------------------------------------------------------
    # Line segments
    # ------------------------------------------------------------

    def render_line_segments_at_frame(self, document: AnimationDocument, frame: float) -> LineSegmentBuffer:
        """
        Closed-ring segments for every visible polygon.

        For a ring p0..pn-1 the segments are (p0,p1), (p1,p2) ... (pn-1,p0).
        Each vertex is written as x, y, z, 1.0. Polygons with fewer than two
        resolved points contribute nothing.
        """
        vertex_data: List[float] = []
        segment_count = 0

        for feature in document.features:
            if feature.feature_type != FeatureType.POLYGON or not feature.is_visible_at(frame):
                continue

            points = self.render_feature(feature, frame).points
            if len(points) < 2:
                continue

            for i, start in enumerate(points):
                end = points[(i + 1) % len(points)]
                vertex_data.extend((start.x, start.y, start.z, HOMOGENEOUS_W))
                vertex_data.extend((end.x, end.y, end.z, HOMOGENEOUS_W))
                segment_count += 1

        log.debug(f"Built line segments for frame {frame}", segments=segment_count)
        return LineSegmentBuffer(segment_count=segment_count, vertex_data=tuple(vertex_data))
