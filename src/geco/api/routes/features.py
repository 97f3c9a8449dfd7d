"""
Feature Endpoints - authoring features, points and keyframes

Every mutation names its feature explicitly in the path. Errors from the
engine (unknown feature, duplicate ids, zero-length positions) are turned
into HTTP responses by the exception handlers.
"""

from fastapi import APIRouter, Depends, status

from geco.api.dependencies import get_engine
from geco.api.schemas.feature import (
    FeatureCreateRequest, FeatureCreatedResponse, FeatureListResponse, FeatureSummaryResponse,
    KeyframeAddRequest, PointAddRequest, PointAddedResponse, PropertySetRequest
)
from geco.engine.animation_engine import AnimationEngine
from geco.utils.serialization import Serializer

router = APIRouter(
    prefix="/features",
    tags=["Features"],
)


@router.post(
    "",
    response_model=FeatureCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create feature",
    description="Create a Point, Polyline or Polygon feature and make it the active feature"
)
async def create_feature(
    request: FeatureCreateRequest,
    engine: AnimationEngine = Depends(get_engine)
) -> FeatureCreatedResponse:
    """
    Create a feature.

    **Request Body:**
    ```json
    {"name": "Coast", "type": 2, "appearance_frame": 0, "disappearance_frame": 100}
    ```

    `type` also accepts the names "point", "polyline", "polygon".
    A feature is visible on frames appearance_frame <= f < disappearance_frame.
    """
    feature_id = engine.create_feature(
        request.name,
        request.type,
        request.appearance_frame,
        request.disappearance_frame,
        feature_id=request.feature_id,
    )
    return FeatureCreatedResponse(feature_id=feature_id)


@router.get(
    "",
    response_model=FeatureListResponse,
    summary="List features",
    description="All features in insertion order, without keyframe data"
)
async def list_features(engine: AnimationEngine = Depends(get_engine)) -> FeatureListResponse:
    summaries = [
        FeatureSummaryResponse(**Serializer.feature_summary(f))
        for f in engine.list_features()
    ]
    return FeatureListResponse(
        features=summaries,
        count=len(summaries),
        active_feature_id=engine.active_feature_id,
    )


@router.post(
    "/{feature_id}/points",
    response_model=PointAddedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add point",
    description="Add a point with its first keyframe; the position is projected onto the unit sphere"
)
async def add_point(
    feature_id: str,
    request: PointAddRequest,
    engine: AnimationEngine = Depends(get_engine)
) -> PointAddedResponse:
    point_id = engine.add_point(feature_id, request.point_id, request.frame, request.x, request.y, request.z)
    return PointAddedResponse(feature_id=feature_id, point_id=point_id)


@router.post(
    "/{feature_id}/points/{point_id}/keyframes",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Add position keyframe",
    description="Add a keyframe to an existing point; a keyframe at the same frame is replaced"
)
async def add_keyframe(
    feature_id: str,
    point_id: str,
    request: KeyframeAddRequest,
    engine: AnimationEngine = Depends(get_engine)
) -> None:
    engine.add_position_keyframe_to_point(feature_id, point_id, request.frame, request.x, request.y, request.z)


@router.put(
    "/{feature_id}/properties/{key}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Set feature property"
)
async def set_property(
    feature_id: str,
    key: str,
    request: PropertySetRequest,
    engine: AnimationEngine = Depends(get_engine)
) -> None:
    engine.set_feature_property(feature_id, key, request.value)
