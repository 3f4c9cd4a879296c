"""
Custom exception hierarchy.

Every exception carries an HTTP status code and a machine-readable code so
the handlers in ``app.main`` can turn it into a JSON error body with an
``error`` field.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class SoulBuddyException(Exception):
    """Base class for all application errors."""

    status_code: int = 500
    default_code: str = "SOULBUDDY_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self, include_details: bool = True) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message, "code": self.code}
        if include_details and self.details:
            payload["details"] = self.details
        return payload


class ValidationError(SoulBuddyException):
    """Client input is incomplete or malformed."""

    status_code = 400
    default_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        missing: Optional[List[str]] = None,
        received: Optional[Dict[str, Any]] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if field:
            details["field"] = field
        super().__init__(message, details=details)
        self.missing = list(missing or [])
        self.received = dict(received or {})

    def to_dict(self, include_details: bool = True) -> Dict[str, Any]:
        payload = super().to_dict(include_details=include_details)
        if self.missing:
            payload["missing"] = self.missing
        payload["received"] = self.received
        return payload


class ResourceNotFoundError(SoulBuddyException):
    status_code = 404
    default_code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: Optional[str] = None) -> None:
        details = {"resource_id": resource_id} if resource_id else {}
        super().__init__(f"{resource} not found", details=details)
        self.resource = resource


class DatabaseError(SoulBuddyException):
    status_code = 500
    default_code = "DATABASE_ERROR"

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        original_error: Optional[str] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if operation:
            details["operation"] = operation
        if original_error:
            details["original_error"] = original_error
        super().__init__(message, details=details)


class ExternalServiceError(SoulBuddyException):
    """An upstream provider failed or returned an unusable payload."""

    status_code = 502
    default_code = "EXTERNAL_SERVICE_ERROR"

    def __init__(
        self,
        service: str,
        message: str,
        original_error: Optional[str] = None,
    ) -> None:
        details: Dict[str, Any] = {"service": service}
        if original_error:
            details["original_error"] = original_error
        super().__init__(f"{service}: {message}", details=details)
        self.service = service
