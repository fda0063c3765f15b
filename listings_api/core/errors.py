"""
Error hierarchy - typed exceptions for every failure the listings API surfaces.
Challenge: One error shape for clients; domain errors carry their own HTTP status.
Design: Single base class so one FastAPI handler maps all of them (see api/error_handlers.py).
"""

from collections.abc import Iterable
from typing import Any


class ListingsError(Exception):
    """Base exception for all listings API errors."""

    def __init__(self, message: str, code: str, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> dict[str, Any]:
        """Convert to standardized REST error response."""
        return {"error": {"code": self.code, "message": self.message}}


class ValidationFailure(ListingsError):
    """One or more field violations. User-correctable; nothing was written."""

    def __init__(self, violations: Iterable[Any]):
        self.violations = list(violations)
        fields = ", ".join(sorted({v.field for v in self.violations}))
        super().__init__(f"Invalid value for: {fields}", "VALIDATION_FAILED", 422)

    def to_response(self) -> dict[str, Any]:
        body = super().to_response()
        body["error"]["violations"] = [
            {"field": v.field, "message": v.message} for v in self.violations
        ]
        return body


class NotFound(ListingsError):
    """Requested resource id has no record."""

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(f"{resource} {resource_id} not found", "NOT_FOUND", 404)
        self.resource = resource
        self.resource_id = resource_id


class UnknownFieldError(ListingsError):
    """Write payload carries keys outside the writable projection (strict mode)."""

    def __init__(self, fields: Iterable[str], context: str):
        self.fields = sorted(fields)
        super().__init__(
            f"Unknown or read-only field(s) for {context}: {', '.join(self.fields)}",
            "UNKNOWN_FIELD",
            400,
        )

    def to_response(self) -> dict[str, Any]:
        body = super().to_response()
        body["error"]["fields"] = self.fields
        return body


class Conflict(ListingsError):
    """Write collides with an existing record (e.g. duplicate email)."""

    def __init__(self, message: str):
        super().__init__(message, "CONFLICT", 409)
