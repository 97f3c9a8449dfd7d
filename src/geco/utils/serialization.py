"""
Serialization utilities - mapping between engine types and JSON-compatible dicts

Provides one-way, pure conversions:
- Render records (RenderedFeature, LineSegmentBuffer) → dicts for the display layer
- Document model (AnimationDocument, Feature, paths) → dicts for inspection/export

The functions never return references into engine state: every list and
dict in the output is freshly built.
"""

from typing import Any, Dict, List

from geco.models.domain import AnimationDocument, Feature, PointAnimationPath
from geco.models.render import LineSegmentBuffer, RenderedFeature, RenderedPoint
from geco.models.vector import Vec3


class Serializer:
    """Central model serialization for the JSON boundary"""

    # ========================================================================
    # VALUES
    # ========================================================================

    @staticmethod
    def vec_to_dict(vec: Vec3) -> Dict[str, float]:
        return {"x": vec.x, "y": vec.y, "z": vec.z}

    # ========================================================================
    # RENDER OUTPUT
    # ========================================================================

    @staticmethod
    def rendered_point_to_dict(point: RenderedPoint) -> Dict[str, Any]:
        return {"point_id": point.point_id, "x": point.x, "y": point.y, "z": point.z}

    @staticmethod
    def rendered_feature_to_dict(feature: RenderedFeature) -> Dict[str, Any]:
        """
        Serialize one rendered feature

        Returns:
            Dict with feature_id, name, type (name), type_code and ordered points
        """
        return {
            "feature_id": feature.feature_id,
            "name": feature.name,
            "type": feature.feature_type.name,
            "type_code": feature.feature_type.value,
            "points": [Serializer.rendered_point_to_dict(p) for p in feature.points],
        }

    @staticmethod
    def rendered_features_to_list(features: List[RenderedFeature]) -> List[Dict[str, Any]]:
        return [Serializer.rendered_feature_to_dict(f) for f in features]

    @staticmethod
    def segments_to_dict(buffer: LineSegmentBuffer) -> Dict[str, Any]:
        return {
            "segment_count": buffer.segment_count,
            "vertex_data": list(buffer.vertex_data),
        }

    # ========================================================================
    # DOCUMENT
    # ========================================================================

    @staticmethod
    def path_to_dict(path: PointAnimationPath) -> Dict[str, Any]:
        return {
            "point_id": path.point_id,
            "keyframes": [
                {"frame": k.frame, "position": Serializer.vec_to_dict(k.position)}
                for k in path.keyframes
            ],
        }

    @staticmethod
    def feature_to_dict(feature: Feature) -> Dict[str, Any]:
        """
        Serialize a feature with its full timeline

        Returns:
            Dict with identity, type, window, paths (insertion order),
            snapshots (frame order) and properties
        """
        return {
            "feature_id": feature.feature_id,
            "name": feature.name,
            "type": feature.feature_type.name,
            "type_code": feature.feature_type.value,
            "appearance_frame": feature.appearance_frame,
            "disappearance_frame": feature.disappearance_frame,
            "paths": [Serializer.path_to_dict(p) for p in feature.paths.values()],
            "snapshots": [
                {"frame": s.frame, "point_ids": list(s.point_ids)}
                for s in feature.snapshots
            ],
            "properties": dict(feature.properties),
        }

    @staticmethod
    def feature_summary(feature: Feature) -> Dict[str, Any]:
        """Compact feature listing entry (no keyframes)"""
        return {
            "feature_id": feature.feature_id,
            "name": feature.name,
            "type": feature.feature_type.name,
            "type_code": feature.feature_type.value,
            "appearance_frame": feature.appearance_frame,
            "disappearance_frame": feature.disappearance_frame,
            "point_count": len(feature.paths),
            "properties": dict(feature.properties),
        }

    @staticmethod
    def document_to_dict(document: AnimationDocument) -> Dict[str, Any]:
        return {
            "name": document.name,
            "total_frames": document.total_frames,
            "features": [Serializer.feature_to_dict(f) for f in document.features],
        }
