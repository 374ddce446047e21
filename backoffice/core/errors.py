"""Error Hierarchy — typed, categorized exceptions for every back-office failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; StoreError (503) is critical
    - to_response() produces the REST envelope; field-addressable errors add "fields"
    - No internal details leaked in user-facing messages
    - AuthorizationError carries no information about the protected resource

Design Decisions:
    - Single hierarchy with BackofficeError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    REFERENTIAL_INTEGRITY = "referential_integrity"
    STORE = "store"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_kind: str | None = None
    resource_id: int | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class BackofficeError(Exception):
    """Base exception for all back-office errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


class FieldAddressableError(BackofficeError):
    """Error whose details map onto individual input fields."""

    def __init__(self, *args, field_errors: dict[str, str], **kwargs):
        super().__init__(*args, **kwargs)
        self.field_errors = dict(field_errors)

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["fields"] = dict(self.field_errors)
        return response


# ─── Domain Errors (400-level) ──────────────────────────────────

class AuthorizationError(BackofficeError):
    """Caller is not on the admin allowlist.

    The transport renders this exactly like an unknown route, so the message
    and status mirror a plain 404.
    """
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Not Found", "NOT_FOUND", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 404,
        )


class ValidationError(FieldAddressableError):
    """One or more input fields failed validation; all failures reported together."""
    def __init__(
        self, field_errors: dict[str, str], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Invalid input for: {', '.join(sorted(field_errors))}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            field_errors=field_errors,
        )


class NotFoundError(BackofficeError):
    """Identified record does not exist."""
    def __init__(
        self, resource_kind: str, resource_id: object, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_kind.capitalize()} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_kind = resource_kind
        self.resource_id = resource_id


class ConflictError(FieldAddressableError):
    """Uniqueness invariant violated."""
    def __init__(
        self, field_name: str, message: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
            field_errors={field_name: message},
        )
        self.field = field_name


class ReferentialIntegrityError(BackofficeError):
    """Deletion blocked by dependent data."""
    def __init__(
        self,
        resource_kind: str,
        resource_id: int,
        references: dict[str, int] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Cannot delete {resource_kind} '{resource_id}': it is referenced by other records",
            "REFERENTIAL_INTEGRITY", ErrorCategory.REFERENTIAL_INTEGRITY,
            ErrorSeverity.ERROR, context, 409,
        )
        self.resource_kind = resource_kind
        self.resource_id = resource_id
        self.references = references or {}


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(BackofficeError):
    """Backing store failed for reasons unrelated to the domain invariants."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["message"] = "The data store is temporarily unavailable"
        return response
