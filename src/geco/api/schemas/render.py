"""
Render schemas - per-frame output for the display layer
"""

from typing import List

from pydantic import BaseModel, Field


class RenderedPointResponse(BaseModel):
    point_id: str
    x: float
    y: float
    z: float


class RenderedFeatureResponse(BaseModel):
    """One visible feature, points in structural order"""
    feature_id: str
    name: str
    type: str
    type_code: int
    points: List[RenderedPointResponse]


class RenderFeaturesResponse(BaseModel):
    frame: float
    features: List[RenderedFeatureResponse]
    count: int


class LineSegmentsResponse(BaseModel):
    """Closed polygon outlines as flat vertex data"""
    frame: float
    segment_count: int
    vertex_data: List[float] = Field(
        description="(x, y, z, 1.0) per vertex, two vertices per segment"
    )
