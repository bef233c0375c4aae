"""
Custom HTTP exceptions for Opptym.
"""
from typing import Any

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """Resource not found exception."""

    def __init__(self, resource: str = "Resource"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found"
        )


class ForbiddenError(HTTPException):
    """Access denied exception."""

    def __init__(self, detail: str = "Access denied"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )


class BadRequestError(HTTPException):
    """Bad request exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )


class ConflictError(HTTPException):
    """Conflict exception (e.g., duplicate resource)."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail
        )


class UnauthorizedError(HTTPException):
    """Unauthorized exception."""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class LimitExceededError(HTTPException):
    """Plan ceiling reached; the detail carries the structured limit payload."""

    def __init__(
        self,
        limit_type: str,
        message: str,
        current_usage: int | None = None,
        limit: int | None = None,
        error: str | None = None,
    ):
        detail: dict[str, Any] = {
            "error": error or f"{limit_type} limit exceeded",
            "limitType": limit_type,
            "currentUsage": current_usage,
            "limit": limit,
            "message": message,
        }
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class UpstreamError(HTTPException):
    """A dependency outside the process (renderer, remote site) failed."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
        )
