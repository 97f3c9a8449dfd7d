"""Feature domain models"""

from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from geco.models.enums import FeatureType
from geco.models.domain.path import PointAnimationPath


@dataclass(frozen=True)
class FeatureStructureSnapshot:
    """
    Ordered point ids that compose a feature from `frame` onward,
    until a later snapshot supersedes it.
    """
    frame: int
    point_ids: List[str] = field(default_factory=list)


@dataclass
class Feature:
    """
    Named geometric entity with a visibility window and time-varying vertex set.

    paths preserves point insertion order (dict order), which is the order
    written into structure snapshots.
    """
    feature_id: str
    name: str
    feature_type: FeatureType
    appearance_frame: int
    disappearance_frame: int
    paths: Dict[str, PointAnimationPath] = field(default_factory=dict)
    snapshots: List[FeatureStructureSnapshot] = field(default_factory=list)
    properties: Dict[str, str] = field(default_factory=dict)

    def is_visible_at(self, frame: float) -> bool:
        """Half-open visibility window [appearance_frame, disappearance_frame)"""
        return self.appearance_frame <= frame < self.disappearance_frame

    def point_ids(self) -> List[str]:
        """All point ids in insertion order"""
        return list(self.paths.keys())

    def get_path(self, point_id: str) -> Optional[PointAnimationPath]:
        return self.paths.get(point_id)

    def add_path(self, path: PointAnimationPath) -> None:
        self.paths[path.point_id] = path

    def set_snapshot(self, snapshot: FeatureStructureSnapshot) -> bool:
        """
        Insert snapshot in frame order, overwriting one at the same frame

        Returns:
            True if an existing snapshot was overwritten
        """
        frames = [s.frame for s in self.snapshots]
        idx = bisect_left(frames, snapshot.frame)

        if idx < len(frames) and frames[idx] == snapshot.frame:
            self.snapshots[idx] = snapshot
            return True

        self.snapshots.insert(idx, snapshot)
        return False
