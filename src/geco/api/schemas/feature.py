"""
Feature schemas - creating features and editing their points
"""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from geco.models.domain.document import FRAME_MAX, FRAME_MIN


class FeatureCreateRequest(BaseModel):
    """Request to create a feature"""
    name: str = Field(description="Display name")
    type: Union[int, str] = Field(
        description="Type code (0=Point, 1=Polyline, 2=Polygon) or type name"
    )
    appearance_frame: int = Field(ge=FRAME_MIN, le=FRAME_MAX, description="First visible frame")
    disappearance_frame: int = Field(
        ge=FRAME_MIN,
        le=FRAME_MAX,
        description="First frame at which the feature is hidden again"
    )
    feature_id: Optional[str] = Field(
        None,
        min_length=1,
        description="Explicit id (generated when omitted)"
    )


class FeatureCreatedResponse(BaseModel):
    feature_id: str


class FeatureSummaryResponse(BaseModel):
    """Feature listing entry"""
    feature_id: str
    name: str
    type: str
    type_code: int
    appearance_frame: int
    disappearance_frame: int
    point_count: int
    properties: Dict[str, str]


class FeatureListResponse(BaseModel):
    features: List[FeatureSummaryResponse]
    count: int
    active_feature_id: Optional[str] = None


class PointAddRequest(BaseModel):
    """Request to add a point with its first keyframe"""
    point_id: Optional[str] = Field(
        None,
        min_length=1,
        description="Point id, unique inside the feature (generated when omitted)"
    )
    frame: int = Field(ge=FRAME_MIN, le=FRAME_MAX, description="Frame of the first keyframe")
    x: float
    y: float
    z: float


class PointAddedResponse(BaseModel):
    feature_id: str
    point_id: str


class KeyframeAddRequest(BaseModel):
    """Request to add (or replace) a position keyframe"""
    frame: int = Field(ge=FRAME_MIN, le=FRAME_MAX)
    x: float
    y: float
    z: float


class PropertySetRequest(BaseModel):
    value: str = Field(description="Property value (overwrites any previous value)")
