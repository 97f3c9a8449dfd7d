from .path import PositionKeyframe, PointAnimationPath
from .feature import Feature, FeatureStructureSnapshot
from .document import AnimationDocument, DEFAULT_ANIMATION_NAME, DEFAULT_TOTAL_FRAMES, FRAME_MIN, FRAME_MAX

__all__ = [
    'PositionKeyframe',
    'PointAnimationPath',
    'Feature',
    'FeatureStructureSnapshot',
    'AnimationDocument',
    'DEFAULT_ANIMATION_NAME',
    'DEFAULT_TOTAL_FRAMES',
    'FRAME_MIN',
    'FRAME_MAX',
]
