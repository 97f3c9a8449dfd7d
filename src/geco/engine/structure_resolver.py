"""
Structure Resolver

Answers "which points, in what order, make up this feature at frame F".
Snapshots are sorted ascending by frame; the one in effect at F is the
snapshot with the greatest frame <= F (a floor lookup).
"""

from bisect import bisect_right
from typing import List, Optional

from geco.models.domain.feature import Feature, FeatureStructureSnapshot


def snapshot_at(feature: Feature, frame: float) -> Optional[FeatureStructureSnapshot]:
    """Snapshot in effect at `frame`, or None before the first snapshot"""
    frames = [s.frame for s in feature.snapshots]
    idx = bisect_right(frames, frame)
    if idx == 0:
        return None
    return feature.snapshots[idx - 1]


def resolve_structure(feature: Feature, frame: float) -> List[str]:
    """
    Ordered point ids composing `feature` at `frame`.

    Returns an empty list when the frame precedes every snapshot.
    The returned list is a copy; callers may mutate it freely.
    """
    snapshot = snapshot_at(feature, frame)
    if snapshot is None:
        return []
    return list(snapshot.point_ids)
