"""
API Dependencies - Service container access for FastAPI endpoints

Pattern:
1. __main__ (or a test) builds a ServiceContainer
2. it calls set_service_container() before serving
3. endpoints pull what they need through Depends()

Example:
    @router.get("/features")
    async def list_features(engine: AnimationEngine = Depends(get_engine)):
        return engine.list_features()
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from geco.engine.animation_engine import AnimationEngine
from geco.services.service_container import ServiceContainer
from geco.services.storage_service import AnimationStorageService

DEFAULT_OWNER_ID = "anonymous"

_service_container: Optional[ServiceContainer] = None


def set_service_container(services: Optional[ServiceContainer]) -> None:
    """
    Store the service container for API access.

    Args:
        services: The ServiceContainer (None detaches it, used by tests)
    """
    global _service_container
    _service_container = services


async def get_service_container() -> ServiceContainer:
    """
    FastAPI dependency for accessing service container.

    Raises:
        HTTPException: 503 Service Unavailable if services not initialized
    """
    if _service_container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service container not initialized."
        )
    return _service_container


async def get_owner_id(
    x_owner_id: Optional[str] = Header(None, alias="X-Owner-Id")
) -> str:
    """Caller identity; requests without the header share the anonymous engine"""
    owner = (x_owner_id or "").strip()
    return owner or DEFAULT_OWNER_ID


async def get_engine(
    owner_id: str = Depends(get_owner_id),
    services: ServiceContainer = Depends(get_service_container)
) -> AnimationEngine:
    return services.engines.get(owner_id)


async def get_storage(
    services: ServiceContainer = Depends(get_service_container)
) -> AnimationStorageService:
    return services.storage
