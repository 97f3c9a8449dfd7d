"""Document service - Mutation API over an AnimationDocument"""

import uuid
from typing import Dict, List, Optional, Union

from geco.models.domain import (
    FRAME_MAX,
    FRAME_MIN,
    AnimationDocument,
    Feature,
    FeatureStructureSnapshot,
    PointAnimationPath,
    PositionKeyframe,
)
from geco.models.enums import FeatureType, LogCategory
from geco.models.errors import (
    DuplicateFeatureId,
    DuplicatePointId,
    FeatureNotFound,
    FrameOutOfRange,
    InvalidTotalFrames,
    NoActiveFeature,
    PointNotFound,
)
from geco.models.vector import Vec3
from geco.utils.enum_helper import EnumHelper
from geco.utils.logger import get_logger

log = get_logger().for_category(LogCategory.MUTATION)
doc_log = log.with_category(LogCategory.DOCUMENT)


def _check_frame(field: str, frame: int) -> None:
    if isinstance(frame, bool) or not isinstance(frame, int) or not FRAME_MIN <= frame <= FRAME_MAX:
        raise FrameOutOfRange(field, frame)


class DocumentService:
    """
    Builds and edits one AnimationDocument.

    Every operation that targets a feature takes its feature_id explicitly.
    The "active feature" (last created or last decoded feature) is only a
    convenience for add_point_to_active_feature(); nothing else reads it.
    """

    def __init__(self, document: Optional[AnimationDocument] = None):
        self.document = document if document is not None else AnimationDocument()
        self._active_feature_id: Optional[str] = None

    # ------------------------------------------------------------------
    # Document replacement
    # ------------------------------------------------------------------

    def replace_document(self, document: AnimationDocument) -> None:
        """
        Swap in a whole new document (used after a successful decode).

        The active feature becomes the last feature of the new document.
        """
        self.document = document
        self._active_feature_id = document.features[-1].feature_id if document.features else None
        doc_log.info(
            "Document replaced",
            name=document.name,
            features=len(document.features),
            active=self._active_feature_id,
        )

    # ------------------------------------------------------------------
    # Document metadata
    # ------------------------------------------------------------------

    def set_animation_name(self, name: str) -> None:
        doc_log.info("Animation renamed", old=self.document.name, new=name)
        self.document.name = name

    def get_animation_name(self) -> str:
        return self.document.name

    def set_total_frames(self, total_frames: int) -> None:
        """
        Set animation length

        Raises:
            InvalidTotalFrames: value is not an integer in 1..FRAME_MAX (prior value kept)
        """
        if isinstance(total_frames, bool) or not isinstance(total_frames, int) or not 0 < total_frames <= FRAME_MAX:
            raise InvalidTotalFrames(total_frames)
        doc_log.info("Total frames set", old=self.document.total_frames, new=total_frames)
        self.document.total_frames = total_frames

    def get_total_frames(self) -> int:
        return self.document.total_frames

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def active_feature_id(self) -> Optional[str]:
        return self._active_feature_id

    def list_features(self) -> List[Feature]:
        return list(self.document.features)

    def get_feature(self, feature_id: str) -> Feature:
        feature = self.document.find_feature(feature_id)
        if feature is None:
            raise FeatureNotFound(feature_id)
        return feature

    def get_path(self, feature_id: str, point_id: str) -> PointAnimationPath:
        feature = self.get_feature(feature_id)
        path = feature.get_path(point_id)
        if path is None:
            raise PointNotFound(feature_id, point_id)
        return path

    # ------------------------------------------------------------------
    # Features
    # ------------------------------------------------------------------

    def create_feature(
        self,
        name: str,
        type_code: Union[int, str, FeatureType],
        appearance_frame: int,
        disappearance_frame: int,
        feature_id: Optional[str] = None
    ) -> str:
        """
        Append a new, empty feature and make it the active feature

        Args:
            name: Display name
            type_code: 0/1/2, a type name, or FeatureType
            appearance_frame: First visible frame
            disappearance_frame: First frame no longer visible
            feature_id: Explicit id (generated when omitted or empty)

        Returns:
            The feature id

        Raises:
            InvalidFeatureType: type_code is not Point/Polyline/Polygon
            FrameOutOfRange: a window frame does not fit 32 bits
            DuplicateFeatureId: explicit feature_id already used
        """
        feature_type = EnumHelper.feature_type(type_code)
        _check_frame("appearance_frame", appearance_frame)
        _check_frame("disappearance_frame", disappearance_frame)

        if feature_id:
            if self.document.has_feature(feature_id):
                raise DuplicateFeatureId(feature_id)
        else:
            feature_id = self._generate_feature_id()

        feature = Feature(
            feature_id=feature_id,
            name=name,
            feature_type=feature_type,
            appearance_frame=appearance_frame,
            disappearance_frame=disappearance_frame,
        )
        self.document.features.append(feature)
        self._active_feature_id = feature_id

        log.info(
            "Feature created",
            feature=feature_id,
            name=name,
            type=feature_type.name,
            window=f"[{appearance_frame}, {disappearance_frame})",
        )
        return feature_id

    def set_feature_property(self, feature_id: str, key: str, value: str) -> None:
        feature = self.get_feature(feature_id)
        feature.properties[key] = value
        log.debug("Feature property set", feature=feature_id, key=key)

    def get_feature_properties(self, feature_id: str) -> Dict[str, str]:
        return dict(self.get_feature(feature_id).properties)

    # ------------------------------------------------------------------
    # Points
    # ------------------------------------------------------------------

    def add_point(
        self,
        feature_id: str,
        point_id: Optional[str],
        frame: int,
        x: float,
        y: float,
        z: float
    ) -> str:
        """
        Add a new vertex to a feature

        Creates the point's path with a single keyframe at `frame` and writes
        the feature's full point list (insertion order) as the structure
        snapshot at `frame`, replacing any snapshot already at that frame.

        Args:
            feature_id: Target feature
            point_id: Point id, or empty/None to generate "point-<n>"
            frame: Frame of the first keyframe and of the snapshot
            x, y, z: Raw position (normalized before storing)

        Returns:
            The point id

        Raises:
            FeatureNotFound, DuplicatePointId, InvalidPosition, FrameOutOfRange
        """
        _check_frame("frame", frame)
        feature = self.get_feature(feature_id)

        if point_id:
            if feature.get_path(point_id) is not None:
                raise DuplicatePointId(feature_id, point_id)
        else:
            point_id = self._generate_point_id(feature)

        position = Vec3.unit(x, y, z)

        path = PointAnimationPath(point_id=point_id)
        path.insert_keyframe(PositionKeyframe(frame=frame, position=position))
        feature.add_path(path)

        overwritten = feature.set_snapshot(
            FeatureStructureSnapshot(frame=frame, point_ids=feature.point_ids())
        )

        log.info(
            "Point added",
            feature=feature_id,
            point=point_id,
            frame=frame,
            snapshot="overwritten" if overwritten else "inserted",
        )
        return point_id

    def add_point_to_active_feature(
        self,
        point_id: Optional[str],
        frame: int,
        x: float,
        y: float,
        z: float
    ) -> str:
        """
        Convenience form of add_point() targeting the most recently created
        (or decoded) feature.

        Raises:
            NoActiveFeature: no feature has been created yet
        """
        if self._active_feature_id is None:
            raise NoActiveFeature()
        return self.add_point(self._active_feature_id, point_id, frame, x, y, z)

    def add_position_keyframe_to_point(
        self,
        feature_id: str,
        point_id: str,
        frame: int,
        x: float,
        y: float,
        z: float
    ) -> None:
        """
        Insert a keyframe into a point's path, keeping frame order.

        A keyframe at a frame that already has one replaces it.

        Raises:
            FeatureNotFound, PointNotFound, InvalidPosition, FrameOutOfRange
        """
        _check_frame("frame", frame)
        path = self.get_path(feature_id, point_id)
        position = Vec3.unit(x, y, z)
        replaced = path.insert_keyframe(PositionKeyframe(frame=frame, position=position))

        log.info(
            "Keyframe replaced" if replaced else "Keyframe added",
            feature=feature_id,
            point=point_id,
            frame=frame,
            keyframes=len(path.keyframes),
        )

    # ------------------------------------------------------------------
    # Id generation
    # ------------------------------------------------------------------

    def _generate_feature_id(self) -> str:
        while True:
            candidate = f"feature-{uuid.uuid4().hex}"
            if not self.document.has_feature(candidate):
                return candidate

    @staticmethod
    def _generate_point_id(feature: Feature) -> str:
        n = len(feature.paths)
        while f"point-{n}" in feature.paths:
            n += 1
        return f"point-{n}"
