"""Error Hierarchy: typed, categorized exceptions for every API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are recoverable; persistence errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler
    - User-facing messages never carry driver errors, SQL, or stack traces

Design Decisions:
    - Single hierarchy with SataError base so one global handler covers all of them
    - ErrorContext as dataclass: request identifiers for logs without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


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
    DATABASE = "database"
    EXTERNAL_SERVICE = "external_service"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Identifiers attached to an error for debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    resource_id: str | None = None


class SataError(Exception):
    """Base exception for all SATA API errors."""

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
        return {"error": {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }}


# ─── Request Errors (400-level) ─────────────────────────────────
# Body/query validation failures are raised by Pydantic (RequestValidationError)

class ResourceNotFoundError(SataError):
    """Requested entity does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Persistence / Collaborator Errors (500-level) ──────────────

class DatabaseError(SataError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class MoodLogPersistenceError(SataError):
    """The mood log transaction was rolled back."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Failed to log mood", "MOOD_LOG_FAILED", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )


class MessagePersistenceError(SataError):
    """Reading or writing message interactions failed."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to {operation} messages", "MESSAGE_STORE_FAILED",
            ErrorCategory.DATABASE, ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class UtilizationTrackingError(SataError):
    """The directory manager failed to record a utilization event."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Failed to track utilization", "UTILIZATION_TRACKING_FAILED",
            ErrorCategory.EXTERNAL_SERVICE, ErrorSeverity.CRITICAL, context, 500,
        )
