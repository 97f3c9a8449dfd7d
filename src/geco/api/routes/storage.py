"""
Storage Endpoints - binary export/import and saved animations

Binary bodies travel as application/octet-stream. Saved animations are
scoped to the caller (X-Owner-Id); another owner's blob is reported as
not found.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from geco.api.dependencies import get_engine, get_owner_id, get_storage
from geco.api.schemas.storage import (
    AnimationSavedResponse, ImportResultResponse, SavedAnimationListResponse, SavedAnimationResponse
)
from geco.engine.animation_engine import AnimationEngine
from geco.services.storage_service import AnimationStorageService

OCTET_STREAM = "application/octet-stream"

router = APIRouter(
    prefix="/storage",
    tags=["Storage"],
)


def _import_result(engine: AnimationEngine) -> ImportResultResponse:
    return ImportResultResponse(
        name=engine.get_animation_name(),
        total_frames=engine.get_total_frames(),
        feature_count=len(engine.list_features()),
    )


@router.get(
    "/export",
    summary="Export current animation",
    description="Encoded document bytes",
    response_class=Response,
    responses={200: {"content": {OCTET_STREAM: {}}}}
)
async def export_animation(engine: AnimationEngine = Depends(get_engine)) -> Response:
    return Response(content=engine.encode(), media_type=OCTET_STREAM)


@router.post(
    "/import",
    response_model=ImportResultResponse,
    summary="Import animation",
    description="Replace the current document with the encoded document in the request body"
)
async def import_animation(
    request: Request,
    engine: AnimationEngine = Depends(get_engine)
) -> ImportResultResponse:
    """
    Decode the raw request body into the engine.

    On 400 DECODE_ERROR the current document is left exactly as it was.
    """
    engine.decode(await request.body())
    return _import_result(engine)


@router.post(
    "/animations",
    response_model=AnimationSavedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save current animation"
)
async def save_animation(
    owner_id: str = Depends(get_owner_id),
    engine: AnimationEngine = Depends(get_engine),
    storage: AnimationStorageService = Depends(get_storage)
) -> AnimationSavedResponse:
    return AnimationSavedResponse(blob_id=storage.save(owner_id, engine))


@router.post(
    "/animations/raw",
    response_model=AnimationSavedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save encoded animation",
    description="Validate the encoded document in the request body and store it unchanged"
)
async def save_raw_animation(
    request: Request,
    owner_id: str = Depends(get_owner_id),
    storage: AnimationStorageService = Depends(get_storage)
) -> AnimationSavedResponse:
    return AnimationSavedResponse(blob_id=storage.save_bytes(owner_id, await request.body()))


@router.get(
    "/animations",
    response_model=SavedAnimationListResponse,
    summary="List saved animations"
)
async def list_animations(
    owner_id: str = Depends(get_owner_id),
    storage: AnimationStorageService = Depends(get_storage)
) -> SavedAnimationListResponse:
    items = [
        SavedAnimationResponse(blob_id=b.blob_id, name=b.name, size=b.size, created_at=b.created_at)
        for b in storage.list(owner_id)
    ]
    return SavedAnimationListResponse(animations=items, count=len(items))


@router.get(
    "/animations/{blob_id}",
    summary="Download saved animation",
    response_class=Response,
    responses={200: {"content": {OCTET_STREAM: {}}}}
)
async def get_animation_bytes(
    blob_id: str,
    owner_id: str = Depends(get_owner_id),
    storage: AnimationStorageService = Depends(get_storage)
) -> Response:
    return Response(content=storage.get_bytes(owner_id, blob_id), media_type=OCTET_STREAM)


@router.post(
    "/animations/{blob_id}/load",
    response_model=ImportResultResponse,
    summary="Load saved animation",
    description="Decode a saved animation into the caller's engine, replacing its document"
)
async def load_animation(
    blob_id: str,
    owner_id: str = Depends(get_owner_id),
    engine: AnimationEngine = Depends(get_engine),
    storage: AnimationStorageService = Depends(get_storage)
) -> ImportResultResponse:
    storage.load(owner_id, blob_id, engine)
    return _import_result(engine)
