# core/errors.py
"""
Application error taxonomy.

Business functions raise these; the handlers registered in ``main`` turn
them into ``{"detail": ...}`` JSON responses with the matching status code.
"""
from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto a client-facing HTTP status."""
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Input is missing or malformed."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """Referenced entity does not exist."""
    status_code = status.HTTP_404_NOT_FOUND


class StateError(AppError):
    """Operation not permitted in the entity's current state."""
    status_code = status.HTTP_409_CONFLICT


class ConflictError(AppError):
    """Uniqueness or referential conflict."""
    status_code = status.HTTP_409_CONFLICT
