"""Service error hierarchy.

Services raise these; the API layer renders them as ``{"error": ..., "code": ...}``
with the carried status code.
"""
import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class WolfpackServiceError(Exception):
    code = "SERVICE_ERROR"
    status_code = 500

    def __init__(self, message: str, *, code: str | None = None, details: Any = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"error": self.message, "code": self.code}
        if self.details is not None:
            body["details"] = self.details
        return body


class AuthenticationError(WolfpackServiceError):
    code = "AUTH_REQUIRED"
    status_code = 401

    def __init__(self, message: str = "Authentication required", **kwargs):
        super().__init__(message, **kwargs)


class AuthorizationError(WolfpackServiceError):
    code = "INSUFFICIENT_PERMISSIONS"
    status_code = 403

    def __init__(self, message: str = "Insufficient permissions", **kwargs):
        super().__init__(message, **kwargs)


class NotFoundError(WolfpackServiceError):
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, resource: str, **kwargs):
        kwargs.setdefault("details", {"resource": resource})
        super().__init__(f"{resource} not found", **kwargs)


class ValidationError(WolfpackServiceError):
    code = "VALIDATION_ERROR"
    status_code = 400


class LocationError(WolfpackServiceError):
    code = "LOCATION_ERROR"
    status_code = 403


class DatabaseError(WolfpackServiceError):
    code = "DATABASE_ERROR"
    status_code = 500


def map_db_error(exc: Exception) -> WolfpackServiceError:
    """Translate a SQLAlchemy exception into a service error."""
    if isinstance(exc, WolfpackServiceError):
        return exc
    if isinstance(exc, IntegrityError):
        text = str(exc.orig).lower() if exc.orig is not None else str(exc).lower()
        if "unique" in text or "duplicate" in text:
            return ValidationError("Unique constraint violation")
        if "foreign key" in text:
            return ValidationError("Foreign key constraint violation")
        return ValidationError("Integrity constraint violation")
    if isinstance(exc, SQLAlchemyError):
        return DatabaseError("Database operation failed")
    return WolfpackServiceError("An unknown error occurred", code="UNKNOWN_ERROR")
