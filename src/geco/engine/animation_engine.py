"""
Animation Engine

One engine instance = one animation document, exclusively owned.

    authoring:  caller ─► DocumentService ─► AnimationDocument
    playback:   AnimationDocument ─► FrameRenderer ─► render records
    persistence: AnimationDocument ◄─► codec ◄─► bytes

All operations are synchronous and self-contained: one call in, one result
(or one GecoError) out. The engine is not reentrant; a host reaching it from
several contexts must serialize calls.
"""

from typing import Any, Dict, List, Optional, Union

from geco.engine.codec import decode_document, encode_document
from geco.engine.frame_renderer import FrameRenderer
from geco.engine.interpolator import DEFAULT_SLERP_EPSILON, interpolate_point_position
from geco.engine.structure_resolver import resolve_structure
from geco.models.domain import AnimationDocument, Feature
from geco.models.domain.document import DEFAULT_ANIMATION_NAME, DEFAULT_TOTAL_FRAMES
from geco.models.enums import FeatureType, LogCategory
from geco.models.errors import DecodeError
from geco.models.render import LineSegmentBuffer, RenderedFeature
from geco.models.vector import Vec3
from geco.services.document_service import DocumentService
from geco.utils.logger import get_logger
from geco.utils.serialization import Serializer

log = get_logger().for_category(LogCategory.CODEC)


class AnimationEngine:
    """
    Facade joining the mutation API, renderer and codec over one document.

    Example:
        engine = AnimationEngine()
        fid = engine.create_feature("Coast", FeatureType.POLYGON, 0, 10)
        engine.add_point(fid, "p1", 0, 1, 0, 0)
        engine.add_point(fid, "p2", 0, 0, 1, 0)
        engine.add_position_keyframe_to_point(fid, "p1", 10, 0, 0, 1)

        features = engine.render_features_at_frame(5)
        data = engine.encode()
    """

    def __init__(
        self,
        name: str = DEFAULT_ANIMATION_NAME,
        total_frames: int = DEFAULT_TOTAL_FRAMES,
        slerp_epsilon: float = DEFAULT_SLERP_EPSILON
    ):
        self.documents = DocumentService(AnimationDocument(name=name, total_frames=total_frames))
        self.renderer = FrameRenderer(slerp_epsilon=slerp_epsilon)

    @property
    def document(self) -> AnimationDocument:
        return self.documents.document

    # ============================================================
    # Mutation API
    # ============================================================

    def create_feature(
        self,
        name: str,
        type_code: Union[int, str, FeatureType],
        appearance_frame: int,
        disappearance_frame: int,
        feature_id: Optional[str] = None
    ) -> str:
        return self.documents.create_feature(name, type_code, appearance_frame, disappearance_frame, feature_id)

    def add_point(self, feature_id: str, point_id: Optional[str], frame: int, x: float, y: float, z: float) -> str:
        return self.documents.add_point(feature_id, point_id, frame, x, y, z)

    def add_point_to_active_feature(self, point_id: Optional[str], frame: int, x: float, y: float, z: float) -> str:
        return self.documents.add_point_to_active_feature(point_id, frame, x, y, z)

    def add_position_keyframe_to_point(
        self, feature_id: str, point_id: str, frame: int, x: float, y: float, z: float
    ) -> None:
        self.documents.add_position_keyframe_to_point(feature_id, point_id, frame, x, y, z)

    def set_feature_property(self, feature_id: str, key: str, value: str) -> None:
        self.documents.set_feature_property(feature_id, key, value)

    def get_feature_properties(self, feature_id: str) -> Dict[str, str]:
        return self.documents.get_feature_properties(feature_id)

    def set_animation_name(self, name: str) -> None:
        self.documents.set_animation_name(name)

    def get_animation_name(self) -> str:
        return self.documents.get_animation_name()

    def set_total_frames(self, total_frames: int) -> None:
        self.documents.set_total_frames(total_frames)

    def get_total_frames(self) -> int:
        return self.documents.get_total_frames()

    @property
    def active_feature_id(self) -> Optional[str]:
        return self.documents.active_feature_id

    def get_feature(self, feature_id: str) -> Feature:
        return self.documents.get_feature(feature_id)

    def list_features(self) -> List[Feature]:
        return self.documents.list_features()

    # ============================================================
    # Playback
    # ============================================================

    def interpolate_point(self, feature_id: str, point_id: str, frame: float) -> Optional[Vec3]:
        """Position of one point at `frame` (None if the path has no keyframes)"""
        path = self.documents.get_path(feature_id, point_id)
        return interpolate_point_position(path, frame, self.renderer.slerp_epsilon)

    def resolve_structure(self, feature_id: str, frame: float) -> List[str]:
        return resolve_structure(self.documents.get_feature(feature_id), frame)

    def render_features_at_frame(self, frame: float) -> List[RenderedFeature]:
        return self.renderer.render_features_at_frame(self.document, frame)

    def render_line_segments_at_frame(self, frame: float) -> LineSegmentBuffer:
        return self.renderer.render_line_segments_at_frame(self.document, frame)

    # ============================================================
    # Codec
    # ============================================================

    def encode(self) -> bytes:
        """Serialize the document (EncodeError if a value does not fit the wire format)"""
        return encode_document(self.document)

    def decode(self, data: bytes) -> None:
        """
        Replace the whole document with the decoded one.

        The buffer is fully parsed and validated before anything changes,
        so on DecodeError the current document is left untouched.

        Raises:
            DecodeError: data is not a valid encoded document
        """
        try:
            document = decode_document(data)
        except DecodeError as ex:
            log.warn("Decode rejected, document unchanged", reason=ex.details.get("reason"), size=len(data))
            raise

        self.documents.replace_document(document)
        log.info("Document decoded", name=document.name, features=len(document.features))

    # ============================================================
    # JSON views
    # ============================================================

    def to_dict(self) -> Dict[str, Any]:
        """Whole document as a JSON-compatible dict"""
        return Serializer.document_to_dict(self.document)
