"""
Error handling middleware for API

Converts exceptions raised while serving a request into ErrorResponse JSON:
- GecoError subclasses map to a fixed HTTP status per error code
- request validation failures become 422
- anything else becomes a generic 500 (details only in the log)
"""

import json
import uuid
from typing import Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from geco.api.schemas.error import ErrorDetail, ErrorResponse, ValidationErrorResponse
from geco.models.enums import LogCategory
from geco.models.errors import GecoError
from geco.utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)


ERROR_STATUS: Dict[str, int] = {
    "INVALID_FEATURE_TYPE": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_POSITION": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_TOTAL_FRAMES": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "FRAME_OUT_OF_RANGE": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "ENCODE_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "NO_ACTIVE_FEATURE": status.HTTP_409_CONFLICT,
    "DUPLICATE_POINT_ID": status.HTTP_409_CONFLICT,
    "DUPLICATE_FEATURE_ID": status.HTTP_409_CONFLICT,
    "FEATURE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "POINT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "BLOB_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DECODE_ERROR": status.HTTP_400_BAD_REQUEST,
    "BLOB_TOO_LARGE": status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
}


def status_for(error: GecoError) -> int:
    """HTTP status for an engine error (400 for codes without an explicit mapping)"""
    return ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST)


def _json(response) -> dict:
    return json.loads(response.model_dump_json())


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors (bad JSON structure, bad path params)"""
        request_id = str(uuid.uuid4())
        errors = exc.errors()

        log.warn(
            f"Validation error: {len(errors)} errors",
            request_id=request_id,
            path=request.url.path
        )

        validation_errors = []
        for error in errors:
            loc = error.get("loc", ())
            field = ".".join(str(x) for x in loc[1:]) if len(loc) > 1 else ".".join(str(x) for x in loc)
            validation_errors.append({
                "field": field,
                "message": error.get("msg", ""),
                "type": error.get("type", "")
            })

        response = ValidationErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details={"error_count": len(errors)}
            ),
            validation_errors=validation_errors,
            request_id=request_id
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_json(response)
        )

    @app.exception_handler(GecoError)
    async def geco_exception_handler(request: Request, exc: GecoError):
        """Handle engine errors raised by any route"""
        request_id = str(uuid.uuid4())

        log.warn(
            f"Engine error: {exc.code} - {exc.message}",
            request_id=request_id,
            path=request.url.path
        )

        response = ErrorResponse(
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details
            ),
            request_id=request_id
        )

        return JSONResponse(
            status_code=status_for(exc),
            content=_json(response)
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors"""
        request_id = str(uuid.uuid4())

        log.error(
            f"Unexpected error: {type(exc).__name__}: {exc}",
            request_id=request_id,
            path=request.url.path
        )

        response = ErrorResponse(
            error=ErrorDetail(
                code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred. Please try again.",
                details={"request_id": request_id}
            ),
            request_id=request_id
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_json(response)
        )
