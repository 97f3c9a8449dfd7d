"""
Animation schemas - document-level settings
"""

from typing import Optional

from pydantic import BaseModel, Field

from geco.models.domain.document import FRAME_MAX


class AnimationInfoResponse(BaseModel):
    """Document settings plus a few counters"""
    name: str = Field(description="Animation name")
    total_frames: int = Field(description="Timeline length in frames")
    feature_count: int = Field(description="Number of features in the document")
    active_feature_id: Optional[str] = Field(
        None,
        description="Feature that receives points added without an explicit feature"
    )


class AnimationUpdateRequest(BaseModel):
    """Partial update of document settings; omitted fields stay as they are"""
    name: Optional[str] = Field(None, description="New animation name")
    total_frames: Optional[int] = Field(
        None,
        le=FRAME_MAX,
        description="New timeline length (must be positive)"
    )
