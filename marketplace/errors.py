"""Application error taxonomy.

Services signal every expected failure by raising :class:`AppError` (or one
of the status-specific subclasses below).  Routers never catch them; the
exception handlers registered in :mod:`marketplace.main` turn them into JSON
responses carrying the message unchanged.
"""

from __future__ import annotations


class AppError(Exception):
    """Expected domain failure with a user-facing message and HTTP status."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, status_code={self.status_code})"


class BadRequestError(AppError):
    status_code = 400


class UnauthorizedError(AppError):
    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


__all__ = [
    "AppError",
    "BadRequestError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "UnauthorizedError",
]
