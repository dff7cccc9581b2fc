"""Error Hierarchy — typed, categorized exceptions for every Wildwatch failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are WARNING; server errors (500-level) are ERROR or CRITICAL
    - to_response() produces the {"error", "details"} envelope
    - Stack traces never appear in a response body

Design Decisions:
    - Single hierarchy with WildwatchError base: one global handler catches all
    - ErrorCategory values double as the public "error" label
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
    """Public error categories — rendered as the envelope's "error" field."""
    VALIDATION = "Validation error"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    RESOURCE_NOT_FOUND = "Not found"
    CONFIGURATION = "Configuration error"
    DATABASE = "Internal server error"
    INTERNAL = "Internal server error"


@dataclass
class ErrorContext:
    """Context attached to an error for logging only."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class WildwatchError(Exception):
    """Base exception for all Wildwatch errors."""

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
        """Convert to the {"error", "details"} REST envelope."""
        return {"error": self.category.value, "details": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class InputValidationError(WildwatchError):
    """Request input failed validation outside pydantic (e.g. cross-field rules)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class UnauthorizedError(WildwatchError):
    """Bearer token missing, malformed, expired or rejected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.UNAUTHORIZED,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(WildwatchError):
    """Authenticated caller may not perform the operation."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(WildwatchError):
    """Requested resource does not exist (or is not visible to the caller)."""
    def __init__(
        self, resource_type: str, resource_id: object, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = str(resource_id)
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Server Errors (500-level) ──────────────────────────────────

class ConfigurationError(WildwatchError):
    """A required setting (secret, issuer, storage root) is missing."""
    def __init__(self, setting: str, context: ErrorContext | None = None):
        super().__init__(
            f"{setting} is not configured",
            "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.setting = setting


class DatabaseError(WildwatchError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
