"""
Error response schemas

Shapes returned by the exception handlers in api.middleware.error_handler.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    code: str = Field(description="Machine-readable code, e.g. STATE_NOT_FOUND")
    message: str = Field(description="Human-readable summary")
    details: Optional[Dict[str, Any]] = Field(None, description="Context such as the missing name")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ErrorResponse(BaseModel):
    """Body of every non-validation error"""
    model_config = ConfigDict(json_schema_extra={
        "example": {
            "error": {
                "code": "STATE_NOT_FOUND",
                "message": "State 'hue_stepz' not found",
                "details": {"kind": "state", "name": "hue_stepz"},
                "timestamp": "2026-03-02T10:30:00Z"
            },
            "request_id": "5f0c2a9b1d3e"
        }
    })

    error: ErrorDetail
    request_id: Optional[str] = Field(None, description="Also sent as the X-Request-ID header")


class ValidationErrorResponse(ErrorResponse):
    """422 body: one entry per rejected field"""
    model_config = ConfigDict(json_schema_extra={
        "example": {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": {"error_count": 1},
                "timestamp": "2026-03-02T10:30:00Z"
            },
            "validation_errors": [
                {
                    "field": "duration_ms",
                    "message": "Input should be greater than or equal to 0",
                    "type": "greater_than_equal"
                }
            ],
            "request_id": "5f0c2a9b1d3e"
        }
    })

    validation_errors: List[Dict[str, Any]] = Field(default_factory=list)
