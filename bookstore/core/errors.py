"""Error Hierarchy — typed, categorized exceptions for all Bookstore failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope {"error": {"message", "status"}}
    - message is a string, except BookValidationError where it is the ordered violation list

Design Decisions:
    - Single hierarchy with BookstoreError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Envelope carries only message + status: existing API clients compare bodies verbatim
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    isbn: str | None = None


class BookstoreError(Exception):
    """Base exception for all Bookstore errors."""

    def __init__(
        self,
        message: str | list[str],
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
                "message": self.message,
                "status": self.http_status,
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class BookValidationError(BookstoreError):
    """Book payload failed one or more field constraints."""
    def __init__(self, violations: list[str], context: ErrorContext | None = None):
        super().__init__(
            list(violations), "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class BookNotFoundError(BookstoreError):
    """No book row matches the requested isbn."""
    def __init__(self, isbn: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.isbn = isbn
        # no closing quote; clients match this text verbatim
        super().__init__(
            f"There is no book with an isbn '{isbn}",
            "BOOK_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.isbn = isbn


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(BookstoreError):
    """Database operation failed (constraint violation, connectivity, driver)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
