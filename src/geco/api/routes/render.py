"""
Render Endpoints - per-frame output

Frames may be fractional; positions are interpolated along great circles
between keyframes. Both endpoints are read-only.
"""

from fastapi import APIRouter, Depends, Path

from geco.api.dependencies import get_engine
from geco.api.schemas.render import LineSegmentsResponse, RenderFeaturesResponse
from geco.engine.animation_engine import AnimationEngine
from geco.utils.serialization import Serializer

router = APIRouter(
    prefix="/render",
    tags=["Render"],
)


@router.get(
    "/{frame}/features",
    response_model=RenderFeaturesResponse,
    summary="Render features at frame",
    description="Visible features with interpolated point positions in structural order"
)
async def render_features(
    frame: float = Path(allow_inf_nan=False, description="Frame (may be fractional)"),
    engine: AnimationEngine = Depends(get_engine)
) -> RenderFeaturesResponse:
    features = Serializer.rendered_features_to_list(engine.render_features_at_frame(frame))
    return RenderFeaturesResponse(frame=frame, features=features, count=len(features))


@router.get(
    "/{frame}/segments",
    response_model=LineSegmentsResponse,
    summary="Render polygon outlines at frame",
    description="Closed outlines of visible polygons as (x, y, z, 1.0) vertex pairs"
)
async def render_segments(
    frame: float = Path(allow_inf_nan=False, description="Frame (may be fractional)"),
    engine: AnimationEngine = Depends(get_engine)
) -> LineSegmentsResponse:
    buffer = Serializer.segments_to_dict(engine.render_line_segments_at_frame(frame))
    return LineSegmentsResponse(frame=frame, **buffer)
