"""Animation document - root of the entity graph"""

from dataclasses import dataclass, field
from typing import List, Optional

from geco.models.domain.feature import Feature

DEFAULT_ANIMATION_NAME = "Untitled Animation"
DEFAULT_TOTAL_FRAMES = 100

# Frames are stored as signed 32-bit integers
FRAME_MIN = -2 ** 31
FRAME_MAX = 2 ** 31 - 1


@dataclass
class AnimationDocument:
    """
    Whole animation: name, frame count and features in authoring order.

    Exclusively owned by one engine instance. Replaced wholesale on decode.
    """
    name: str = DEFAULT_ANIMATION_NAME
    total_frames: int = DEFAULT_TOTAL_FRAMES
    features: List[Feature] = field(default_factory=list)

    def find_feature(self, feature_id: str) -> Optional[Feature]:
        for feature in self.features:
            if feature.feature_id == feature_id:
                return feature
        return None

    def has_feature(self, feature_id: str) -> bool:
        return self.find_feature(feature_id) is not None
