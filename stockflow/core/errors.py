"""
Typed application errors.

Services raise these instead of HTTPException so the error kind survives all
the way to the API response. ``main.py`` renders every ``AppError`` as
``{"detail": message, "kind": kind}`` with the matching status code.
"""
from typing import Any, Dict, Optional

from fastapi import status


class AppError(Exception):
    """Base class for all domain errors."""

    kind: str = "error"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        body = {"detail": self.message, "kind": self.kind}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    """Missing or invalid field, duplicate selection, quantity out of bounds."""
    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidTransitionError(ValidationError):
    """Operation not allowed from the aggregate's current status."""
    kind = "invalid_transition"
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(AppError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class InsufficientStockError(AppError):
    """Issuance exceeds the on-hand stock quantity."""
    kind = "insufficient_stock"
    status_code = status.HTTP_409_CONFLICT


class ConflictError(AppError):
    """Duplicate record or a concurrent write won the version check."""
    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class AuthenticationError(AppError):
    kind = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(AppError):
    """Actor's role lacks the permission for the operation."""
    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN
