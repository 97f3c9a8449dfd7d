"""Point path domain models"""

from bisect import bisect_left
from dataclasses import dataclass, field
from typing import List, Optional

from geco.models.vector import Vec3


@dataclass(frozen=True)
class PositionKeyframe:
    """A vertex location (unit vector) at one frame"""
    frame: int
    position: Vec3


@dataclass
class PointAnimationPath:
    """
    Per-vertex timeline of positions.

    Keyframes are kept strictly ascending by frame. Inserting at a frame that
    already has a keyframe replaces that keyframe.
    """
    point_id: str
    keyframes: List[PositionKeyframe] = field(default_factory=list)

    def insert_keyframe(self, keyframe: PositionKeyframe) -> bool:
        """
        Insert keyframe in frame order

        Args:
            keyframe: Keyframe to insert

        Returns:
            True if an existing keyframe at the same frame was replaced
        """
        frames = self.frames()
        idx = bisect_left(frames, keyframe.frame)

        if idx < len(frames) and frames[idx] == keyframe.frame:
            self.keyframes[idx] = keyframe
            return True

        self.keyframes.insert(idx, keyframe)
        return False

    def frames(self) -> List[int]:
        return [k.frame for k in self.keyframes]

    @property
    def first(self) -> Optional[PositionKeyframe]:
        return self.keyframes[0] if self.keyframes else None

    @property
    def last(self) -> Optional[PositionKeyframe]:
        return self.keyframes[-1] if self.keyframes else None
