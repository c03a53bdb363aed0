"""Builders for the JSON bodies returned by the exception handlers.

Every error leaving the API shares the :class:`ErrorResponse` shape; these
helpers stamp the request id and a UTC timestamp so handlers only supply
what differs.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from marketplace.schemas.error import (
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from marketplace.utils.request_context import get_request_id

__all__ = [
    "build_error_response",
    "build_validation_error_response",
    "validation_details_from_errors",
]


def _current_timestamp() -> datetime:
    """Separate helper so tests can pin the clock."""

    return datetime.now(UTC)


def validation_details_from_errors(
    errors: Sequence[dict[str, Any]],
) -> list[ValidationErrorDetail]:
    """Convert pydantic/FastAPI error dicts into response details.

    The leading ``body``/``query``/``path`` location segment is dropped so the
    ``field`` reads like the payload key the client sent.
    """

    details: list[ValidationErrorDetail] = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in {"body", "query", "path", "header"}:
            location = location[1:]
        value = error.get("input")
        details.append(
            ValidationErrorDetail(
                field=".".join(location) or "request",
                message=str(error.get("msg", "")),
                value=value if isinstance(value, str | int | float | bool) else None,
            )
        )
    return details


def build_validation_error_response(
    *,
    errors: Sequence[ValidationErrorDetail],
    message: str,
    detail: str | None,
    status_code: int,
    path: str,
    error_type: ErrorType = ErrorType.VALIDATION_ERROR,
    request_id: str | None = None,
) -> ValidationErrorResponse:
    return ValidationErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=request_id or get_request_id() or None,
        path=path,
        errors=list(errors),
    )


def build_error_response(
    *,
    error_type: ErrorType,
    message: str,
    detail: str | None,
    status_code: int,
    path: str,
    request_id: str | None = None,
) -> ErrorResponse:
    return ErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=request_id or get_request_id() or None,
        path=path,
    )
