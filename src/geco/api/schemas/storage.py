"""
Storage schemas - saved animations and import results
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel


class AnimationSavedResponse(BaseModel):
    blob_id: str


class SavedAnimationResponse(BaseModel):
    blob_id: str
    name: str
    size: int
    created_at: datetime


class SavedAnimationListResponse(BaseModel):
    animations: List[SavedAnimationResponse]
    count: int


class ImportResultResponse(BaseModel):
    """Summary of the document now loaded in the engine"""
    name: str
    total_frames: int
    feature_count: int
