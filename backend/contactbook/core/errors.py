"""Error Hierarchy - typed, categorized exceptions for every Contact Book failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are raised before any store mutation happens
    - Store errors (500-level) carry the driver message text in `message`
    - to_response() produces the REST envelope shared by every endpoint

Design Decisions:
    - Single hierarchy with ContactBookError base: one FastAPI handler catches all
    - DuplicateKeyError defaults to 409 but the transport picks the final status
      (clients of the v1 API expect 200; see config.duplicate_status_code)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity: str | None = None
    entity_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


@dataclass(frozen=True)
class Violation:
    """A single field-level validation failure."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class ContactBookError(Exception):
    """Base exception for all Contact Book errors."""

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
                "context": {
                    "entity": self.context.entity,
                    "entity_id": self.context.entity_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationFailedError(ContactBookError):
    """One or more payload fields failed validation. All violations travel together."""
    def __init__(
        self, violations: list[Violation], context: ErrorContext | None = None,
    ):
        super().__init__(
            "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.violations = list(violations)

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [v.to_dict() for v in self.violations]
        return response


class InvalidIdentifierError(ContactBookError):
    """Supplied id is not a well-formed identifier."""
    def __init__(
        self, entity: str, raw_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = entity
        ctx.entity_id = raw_id
        super().__init__(
            f"'{raw_id}' is not a valid {entity} id",
            "INVALID_IDENTIFIER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.raw_id = raw_id


class ResourceNotFoundError(ContactBookError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = resource_type
        ctx.entity_id = resource_id
        super().__init__(
            f"{resource_type} is not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class DuplicateKeyError(ContactBookError):
    """Uniqueness constraint violated, by the pre-check or by the store's unique index."""
    def __init__(
        self,
        message: str,
        entity: str,
        key_field: str,
        key_value: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = entity
        super().__init__(
            message, "DUPLICATE_KEY", ErrorCategory.CONFLICT,
            ErrorSeverity.INFO, ctx, 409,
        )
        self.key_field = key_field
        self.key_value = key_value

    def to_response(self) -> dict:
        response = super().to_response()
        response["msg"] = self.message
        return response


class DuplicateGroupNameError(DuplicateKeyError):
    """A group with this name already exists."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            "Group is already exists!", "Group", "name", name, context,
        )


class DuplicateMobileError(DuplicateKeyError):
    """A contact with this mobile number already exists."""
    def __init__(self, mobile: str, context: ErrorContext | None = None):
        super().__init__(
            "Contact is Already Exist with same mobile number!",
            "Contact", "mobile", mobile, context,
        )


# ─── Store Errors (500-level) ───────────────────────────────────

class StoreUnavailableError(ContactBookError):
    """Store unreachable or the operation failed at the driver level."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
        category: ErrorCategory = ErrorCategory.DATABASE,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "STORE_UNAVAILABLE", category,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class StoreTimeoutError(StoreUnavailableError):
    """Store call exceeded its time budget."""
    def __init__(
        self, operation: str, timeout_seconds: float, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"timed out after {timeout_seconds}s", operation, context,
            category=ErrorCategory.TIMEOUT,
        )
        self.code = "STORE_TIMEOUT"
        self.timeout_seconds = timeout_seconds
