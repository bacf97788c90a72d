"""Error Hierarchy — typed, categorized exceptions for all dashboard failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors are user-correctable; persistence errors are critical
    - to_response() produces the REST envelope; user-facing text never carries driver details
    - Navigation is NOT an error and has no class here (see OutcomeKind.NAVIGATE)

Design Decisions:
    - Single hierarchy with DashboardError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - AuthFailureKind keeps "wrong credentials" apart from "provider failed" end-to-end
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
    DATABASE = "database"
    AUTHENTICATION = "authentication"
    INTERNAL = "internal"


class AuthFailureKind(str, Enum):
    """Why a sign-in did not establish a session."""
    INVALID_CREDENTIALS = "invalid_credentials"
    PROVIDER_ERROR = "provider_error"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    action: str | None = None
    operation: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class DashboardError(Exception):
    """Base exception for all dashboard errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "action": self.context.action,
                    "operation": self.context.operation,
                },
            }
        }


# ─── User-correctable Errors (400-level) ────────────────────────

class FormValidationError(DashboardError):
    """Submitted form fields failed their schema."""
    def __init__(
        self, field_errors: dict[str, list[str]], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Invalid fields: {', '.join(sorted(field_errors))}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.INFO, context, 400,
        )
        self.field_errors = field_errors


class AuthenticationError(DashboardError):
    """Sign-in failed. kind separates bad credentials from provider faults."""
    def __init__(
        self, kind: AuthFailureKind, context: ErrorContext | None = None,
    ):
        invalid = kind == AuthFailureKind.INVALID_CREDENTIALS
        super().__init__(
            "Invalid credentials." if invalid else "Authentication provider failed",
            "INVALID_CREDENTIALS" if invalid else "AUTHENTICATION_FAILED",
            ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING if invalid else ErrorSeverity.ERROR,
            context, 401,
        )
        self.kind = kind


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PersistenceError(DashboardError):
    """Database operation failed for any reason other than a unique violation."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
