"""
Standardized response helpers for consistent API responses.

Every message body is a ``StatusMessage``: ``{"success": ...}`` or
``{"error": ...}``, optionally with ``details``.
"""

from fastapi import HTTPException, status
from pydantic import BaseModel


class StatusMessage(BaseModel):
    """Standard API status body"""

    error: str | None = None
    success: str | None = None
    details: list[str] | None = None

    def body(self) -> dict:
        return self.model_dump(exclude_none=True)


class APIError(HTTPException):
    """HTTPException carrying a ``StatusMessage`` body"""

    def __init__(self, status_code: int, message: StatusMessage):
        super().__init__(status_code=status_code, detail=message.error)
        self.message = message


def success_response(message: str = "Success") -> dict:
    """Create a successful response body"""
    return StatusMessage(success=message).body()


def error_response(
    message: str = "An error occurred",
    details: list[str] | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> APIError:
    """Create an error response"""
    return APIError(
        status_code=status_code,
        message=StatusMessage(error=message, details=details or None),
    )


def bad_request_response(
    message: str = "Bad request", details: list[str] | None = None
) -> APIError:
    """Create a bad request error response"""
    return error_response(
        message=message, details=details, status_code=status.HTTP_400_BAD_REQUEST
    )


def not_found_response(message: str = "Resource not found") -> APIError:
    """Create a not found error response"""
    return error_response(message=message, status_code=status.HTTP_404_NOT_FOUND)


def conflict_response(message: str = "Resource conflict") -> APIError:
    """Create a conflict error response"""
    return error_response(message=message, status_code=status.HTTP_409_CONFLICT)
