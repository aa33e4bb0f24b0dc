# app/core/exceptions.py
"""
Domain errors raised by services and crud helpers.

Routes never build HTTP responses for these themselves; the handlers registered
in app/main.py translate each class to its status code.
"""
from fastapi import status


class ExpenseTrackerError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ExpenseTrackerError):
    """Entity absent, or present but owned by another user."""
    status_code = status.HTTP_404_NOT_FOUND
    error = "Resource Not Found"


class ConflictError(ExpenseTrackerError):
    """Unique constraint violation (duplicate email, duplicate category name)."""
    status_code = status.HTTP_409_CONFLICT
    error = "Resource Conflict"


class InvalidRequestError(ExpenseTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"


class UnauthorizedError(ExpenseTrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"


class ForbiddenError(ExpenseTrackerError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"
