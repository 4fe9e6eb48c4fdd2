"""Error Hierarchy — typed, categorized exceptions for every storefront failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; storage errors (500-level) are critical
    - to_response() always carries a top-level human-readable "message"
    - Raw driver errors never reach the response body (logged instead)

Design Decisions:
    - Single hierarchy with BoutiqueError base: one FastAPI handler catches all
    - ErrorContext.user_message overrides the message shown to clients, so a
      service can relabel a storage failure ("Failed to add item to cart")
      without losing the original message in logs
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
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    collection: str | None = None
    user_message: str | None = None
    details: list[dict[str, Any]] | None = None
    debug_info: dict[str, Any] | None = None


class BoutiqueError(Exception):
    """Base exception for all storefront errors."""

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
        error = {
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.context.details:
            error["details"] = self.context.details
        return {
            "message": self.context.user_message or self.message,
            "error": error,
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class RequestValidationFailed(BoutiqueError):
    """Payload fields could not be coerced into a storable document."""
    def __init__(
        self, message: str, details: list[dict], context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.details = details
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )


class InvalidObjectIdError(BoutiqueError):
    """Identifier is not a well-formed ObjectId — rejected before storage."""
    def __init__(
        self, raw_id: str | None, message: str = "Invalid product ID",
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.debug_info = {"raw_id": raw_id}
        super().__init__(
            message, "INVALID_OBJECT_ID", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.raw_id = raw_id


class InvalidCredentialsError(BoutiqueError):
    """Login email does not match any registered user."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid email", "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class AccessDeniedError(BoutiqueError):
    """Caller is missing, unknown, or lacks the required role."""
    def __init__(self, required_role: str, context: ErrorContext | None = None):
        super().__init__(
            "Access denied", "ACCESS_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.required_role = required_role


class ResourceNotFoundError(BoutiqueError):
    """Requested document does not exist (or the operation matched nothing)."""
    def __init__(
        self, resource_type: str, resource_id: str,
        message: str | None = None, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.debug_info = {"resource_type": resource_type, "resource_id": resource_id}
        super().__init__(
            message or f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class DuplicateItemError(BoutiqueError):
    """(productName, userEmail) pair already saved in the list."""
    def __init__(self, list_label: str, context: ErrorContext | None = None):
        super().__init__(
            f"Item already exists in {list_label}",
            "DUPLICATE_ITEM", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.list_label = list_label


# ─── Storage Errors (500-level) ─────────────────────────────────

class DatabaseError(BoutiqueError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class UniqueConstraintError(DatabaseError):
    """Insert rejected by a unique index. Services translate this to a conflict."""
    def __init__(self, collection: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.collection = collection
        super().__init__("Unique index violated", "insert", ctx)
        self.code = "UNIQUE_CONSTRAINT"
        self.category = ErrorCategory.CONFLICT
        self.http_status = 409
