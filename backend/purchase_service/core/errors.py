"""Error Hierarchy: typed, categorized exceptions for all purchase service failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are user-correctable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler
    - No transport or driver details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PurchaseServiceError base: FastAPI global handler catches all
    - RateSourceUnavailable subclasses CurrencyConversionError: upstream failures reach
      callers as one business error kind, the upstream detail stays in the logs
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    request_name: str | None = None
    purchase_id: str | None = None
    debug_info: dict[str, Any] | None = None


class PurchaseServiceError(Exception):
    """Base exception for all purchase service errors."""

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


# ─── Domain Errors (400-level) ──────────────────────────────────

class RequestValidationError(PurchaseServiceError):
    """Field-level validation failed. Carries field -> messages."""

    def __init__(
        self,
        errors: Mapping[str, Sequence[str]],
        context: ErrorContext | None = None,
    ):
        super().__init__(
            "Request validation failed.", "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )
        self.errors: dict[str, list[str]] = {
            name: list(messages) for name, messages in errors.items()
        }

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["errors"] = self.errors
        return response


class CurrencyConversionError(PurchaseServiceError):
    """A purchase could not be converted into the requested currency."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CURRENCY_CONVERSION_FAILED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )


class RateSourceUnavailable(CurrencyConversionError):
    """Exchange rate provider failed or answered with an unreadable payload."""

    def __init__(
        self,
        message: str,
        upstream_detail: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(message, context)
        self.category = ErrorCategory.EXTERNAL_API
        self.upstream_detail = upstream_detail


class ResourceNotFoundError(PurchaseServiceError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


# ─── Infrastructure / Programming Errors (500-level) ────────────

class HandlerNotRegistered(PurchaseServiceError):
    """No handler wired for a request type. Never expected in a correct deployment."""
    def __init__(self, request_type: type, context: ErrorContext | None = None):
        super().__init__(
            f"No handler registered for {request_type.__name__}",
            "HANDLER_NOT_REGISTERED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.request_type = request_type


class DatabaseError(PurchaseServiceError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
