"""
FastAPI Application Factory

Assembles the HTTP surface over the animation engines:
- CORS
- exception handlers (GecoError → status code, validation → 422)
- routers under /api/v1 (animation, features, render, storage)
- health check

The factory takes its settings as arguments so tests can build an app
around their own ServiceContainer.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from geco import __version__
from geco.api.dependencies import set_service_container
from geco.api.middleware.error_handler import register_exception_handlers
from geco.api.routes import animation, features, render, storage
from geco.models.config import ApiConfig
from geco.models.enums import LogCategory
from geco.services.service_container import ServiceContainer
from geco.utils.logger import get_logger

log = get_logger().for_category(LogCategory.SYSTEM)


def create_app(
    api_config: Optional[ApiConfig] = None,
    services: Optional[ServiceContainer] = None,
    description: str = "REST API for authoring and rendering animated geographic features",
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        api_config: Title, docs toggle and CORS origins (defaults when None)
        services: Container to serve from; when given it is registered
            with the dependency layer immediately
        description: API description shown in the docs

    Returns:
        Configured FastAPI application ready to run
    """
    api_config = api_config or ApiConfig()

    app = FastAPI(
        title=api_config.title,
        description=description,
        version=__version__,
        docs_url="/docs" if api_config.docs_enabled else None,
        redoc_url="/redoc" if api_config.docs_enabled else None,
        openapi_url="/openapi.json" if api_config.docs_enabled else None
    )

    log.info(f"Creating FastAPI app: {api_config.title} v{__version__}")

    # =========================================================================
    # CORS Configuration
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(api_config.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    log.debug("CORS enabled", origins=str(api_config.cors_origins))

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # Routes
    # =========================================================================

    for module in (animation, features, render, storage):
        app.include_router(module.router, prefix="/api/v1")

    log.debug("Routes registered: animation, features, render, storage (/api/v1)")

    if services is not None:
        set_service_container(services)

    # =========================================================================
    # Health Check Endpoint
    # =========================================================================

    @app.get(
        "/api/health",
        tags=["System"],
        summary="Health check",
        description="Check if API is running and responding"
    )
    async def health_check():
        """Simple health check endpoint for monitoring"""
        return {
            "status": "healthy",
            "service": "geco-api",
            "version": __version__
        }

    @app.get("/", include_in_schema=False)
    async def root():
        return JSONResponse(
            {
                "message": api_config.title,
                "docs": "/docs" if api_config.docs_enabled else None,
                "health": "/api/health"
            }
        )

    log.info(f"FastAPI app created successfully: {api_config.title}")

    return app
