"""
Error schemas - Pydantic models for error responses

Every error leaving the API has the same envelope, whether it started as a
GecoError, a request validation failure or an unexpected exception.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ErrorDetail(BaseModel):
    """Detailed error information"""
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional context (ids, frames, offending values)"
    )
    timestamp: datetime = Field(
        default_factory=_utc_now,
        description="When the error occurred"
    )


class ErrorResponse(BaseModel):
    """API error response - standardized format"""
    error: ErrorDetail = Field(description="Error information")
    request_id: Optional[str] = Field(None, description="Request ID for logging/debugging")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "error": {
                "code": "FEATURE_NOT_FOUND",
                "message": "Feature 'coast' not found",
                "details": {"feature_id": "coast"},
                "timestamp": "2026-01-12T10:30:00Z"
            },
            "request_id": "3f1c2a9e-8d57-4b7e-9a61-0c2f5d7b1e44"
        }
    })


class ValidationErrorResponse(BaseModel):
    """Validation error - when the request body or path is malformed"""
    error: ErrorDetail = Field(description="Error information")
    validation_errors: list[Dict[str, Any]] = Field(
        description="Per-field validation errors"
    )
    request_id: Optional[str] = Field(None, description="Request ID for logging/debugging")
