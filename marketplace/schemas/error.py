"""Error response schemas for consistent error handling."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    """Types of errors that can occur."""

    VALIDATION_ERROR = "validation_error"
    AUTHENTICATION_ERROR = "authentication_error"
    AUTHORIZATION_ERROR = "authorization_error"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    DATABASE_ERROR = "database_error"
    INTERNAL_ERROR = "internal_error"

    @classmethod
    def for_status(cls, status_code: int) -> "ErrorType":
        """Pick the error category matching an HTTP status code."""

        return _STATUS_ERROR_TYPES.get(
            status_code,
            cls.INTERNAL_ERROR if status_code >= 500 else cls.VALIDATION_ERROR,
        )


_STATUS_ERROR_TYPES: dict[int, ErrorType] = {
    400: ErrorType.VALIDATION_ERROR,
    401: ErrorType.AUTHENTICATION_ERROR,
    403: ErrorType.AUTHORIZATION_ERROR,
    404: ErrorType.NOT_FOUND,
    409: ErrorType.CONFLICT,
}


class ErrorResponse(BaseModel):
    """Standardized error response model."""

    error_type: ErrorType = Field(..., description="Category of error")
    message: str = Field(..., description="Human-readable error message")
    detail: str | None = Field(None, description="Additional error details or context")
    status_code: int = Field(..., description="HTTP status code")
    timestamp: datetime = Field(..., description="When error occurred")
    request_id: str | None = Field(None, description="Unique request identifier for tracking")
    path: str | None = Field(None, description="Request path that caused the error")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_type": "authorization_error",
                "message": "상품을 수정할 권한이 없습니다.",
                "detail": None,
                "status_code": 403,
                "timestamp": "2025-11-03T10:30:00Z",
                "request_id": "8c5e2b0e-5d5b-4a4f-9c53-0f3f8c9a1d11",
                "path": "/products/5f0c1b7e-6a43-4f7e-8b8e-3f1c2d7a9e10",
            }
        }
    )


class ValidationErrorDetail(BaseModel):
    """Details for validation errors."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Any = Field(None, description="Value that failed validation")


class ValidationErrorResponse(ErrorResponse):
    """Extended error response for validation errors."""

    error_type: ErrorType = Field(default=ErrorType.VALIDATION_ERROR)
    errors: list[ValidationErrorDetail] = Field(
        default_factory=list, description="List of validation errors"
    )
