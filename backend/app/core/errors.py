"""Error Hierarchy: typed, categorized exceptions for every ledger and session failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope {"error": <message>, "code": <code>}
    - No internal details leaked in user-facing messages: InternalError subclasses
      keep the detail in `detail` (for logs) and expose a generic message

Design Decisions:
    - Single hierarchy with LedgerError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Duplicate email / household map to 400 (CONFLICT code), matching the public contract
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
    EXTERNAL_SERVICE = "external_service"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class LedgerError(Exception):
    """Base exception for all household ledger errors."""

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
        return {"error": self.message, "code": self.code}


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidInputError(LedgerError):
    """Input failed a domain-level check the schema could not express."""
    def __init__(self, message: str = "Invalid data", context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class UnauthorizedError(LedgerError):
    """Missing, malformed, tampered or expired session token, or bad credentials."""
    def __init__(
        self, message: str = "Authentication required", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidCredentialsError(UnauthorizedError):
    """Same error for unknown email and wrong password."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Invalid credentials", context)
        self.code = "INVALID_CREDENTIALS"


class EmailNotVerifiedError(LedgerError):
    """Login attempted before the email address was verified."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Please verify your email before signing in. Check your inbox.",
            "EMAIL_NOT_VERIFIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(LedgerError):
    """Requested resource does not exist or is not owned by the caller."""
    def __init__(self, resource_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type


class ConflictError(LedgerError):
    """Uniqueness rule violated (email already registered, household already exists)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidVerificationTokenError(LedgerError):
    """Verification token unknown, expired or already consumed (indistinguishable to callers)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid or expired verification token",
            "INVALID_VERIFICATION_TOKEN", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class InternalError(LedgerError):
    """Unexpected failure. `detail` is for logs only."""
    def __init__(
        self,
        detail: str,
        code: str = "INTERNAL_ERROR",
        category: ErrorCategory = ErrorCategory.INTERNAL,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            "An unexpected error occurred", code, category,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.detail = detail


class DatabaseError(InternalError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, context,
        )
        self.operation = operation
