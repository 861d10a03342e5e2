"""Application exception types."""

from __future__ import annotations

from typing import Any

from tasktracker.schemas.error import ErrorResponse


class TrackerError(Exception):
    """Structured error carrying a contract error payload."""

    status_code: int = 500
    default_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, *, code: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.payload = ErrorResponse(code=code or self.default_code, message=message, details=details)
        super().__init__(message)

    @property
    def code(self) -> str:
        return self.payload.code

    @property
    def details(self) -> dict[str, Any] | None:
        return self.payload.details


class ValidationError(TrackerError):
    """Missing or invalid input; reported to the caller, never retried."""

    status_code = 422
    default_code = "VALIDATION_ERROR"


class AuthenticationError(ValidationError):
    status_code = 401
    default_code = "INVALID_CREDENTIALS"


class PermissionDeniedError(TrackerError):
    status_code = 403
    default_code = "PERMISSION_DENIED"


class DataAccessError(TrackerError):
    """Transport failure, non-success response, or malformed record from the store."""

    status_code = 502
    default_code = "DATA_ACCESS_FAILED"


class RecordNotFoundError(DataAccessError):
    status_code = 404
    default_code = "RESOURCE_NOT_FOUND"


class RecordConflictError(DataAccessError):
    status_code = 409
    default_code = "RESOURCE_CONFLICT"


__all__ = [
    "AuthenticationError",
    "DataAccessError",
    "PermissionDeniedError",
    "RecordConflictError",
    "RecordNotFoundError",
    "TrackerError",
    "ValidationError",
]
