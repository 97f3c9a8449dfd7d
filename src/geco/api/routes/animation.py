"""
Animation Endpoints - document-level settings and full document view
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from geco.api.dependencies import get_engine
from geco.api.schemas.animation import AnimationInfoResponse, AnimationUpdateRequest
from geco.engine.animation_engine import AnimationEngine

router = APIRouter(
    prefix="/animation",
    tags=["Animation"],
)


def _info(engine: AnimationEngine) -> AnimationInfoResponse:
    return AnimationInfoResponse(
        name=engine.get_animation_name(),
        total_frames=engine.get_total_frames(),
        feature_count=len(engine.list_features()),
        active_feature_id=engine.active_feature_id,
    )


@router.get(
    "",
    response_model=AnimationInfoResponse,
    summary="Get animation settings"
)
async def get_animation(engine: AnimationEngine = Depends(get_engine)) -> AnimationInfoResponse:
    return _info(engine)


@router.put(
    "",
    response_model=AnimationInfoResponse,
    summary="Update animation settings",
    description="Change the name and/or total frame count; omitted fields are unchanged"
)
async def update_animation(
    request: AnimationUpdateRequest,
    engine: AnimationEngine = Depends(get_engine)
) -> AnimationInfoResponse:
    """
    Update document settings.

    The total frame count is validated first, so a rejected request
    (422 INVALID_TOTAL_FRAMES) does not rename the animation either.
    """
    if request.total_frames is not None:
        engine.set_total_frames(request.total_frames)
    if request.name is not None:
        engine.set_animation_name(request.name)
    return _info(engine)


@router.get(
    "/document",
    summary="Get full document",
    description="Whole animation document (features, paths, snapshots, properties) as JSON"
)
async def get_document(engine: AnimationEngine = Depends(get_engine)) -> Dict[str, Any]:
    return engine.to_dict()
