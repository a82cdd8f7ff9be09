"""Error Hierarchy — typed, categorized exceptions for all skin resolution failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - SkinRequestError carries a SkinErrorKind; callers branch on .kind, not on subclass
    - to_response() produces the REST envelope; no internal details leaked in messages

Design Decisions:
    - Single base SkinCacheError: the FastAPI global handler catches all
    - Per-kind defaults in one table: adding a kind is one row, not one class
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from skincache.core.domain_types import SkinErrorKind


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
    skin_name: str | None = None
    player_name: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class SkinCacheError(Exception):
    """Base exception for all SkinCache errors."""

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
                    "skin_name": self.context.skin_name,
                    "player_name": self.context.player_name,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# kind -> (message, category, severity, http_status)
_KIND_DEFAULTS: dict[SkinErrorKind, tuple[str, ErrorCategory, ErrorSeverity, int]] = {
    SkinErrorKind.NOT_PREMIUM: (
        "Name is not a registered premium account",
        ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, 404,
    ),
    SkinErrorKind.NO_SKIN: (
        "No skin data found for this name",
        ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, 404,
    ),
    SkinErrorKind.TRANSIENT_FAILURE: (
        "Skin service unavailable, try again shortly",
        ErrorCategory.EXTERNAL_API, ErrorSeverity.WARNING, 503,
    ),
    SkinErrorKind.UPDATE_DISABLED: (
        "Updating is disabled for this skin",
        ErrorCategory.BUSINESS_RULE, ErrorSeverity.INFO, 409,
    ),
    SkinErrorKind.STORAGE_FAILURE: (
        "Skin storage operation failed",
        ErrorCategory.DATABASE, ErrorSeverity.CRITICAL, 503,
    ),
    SkinErrorKind.UNSUPPORTED_RECORD: (
        "Stored skin record has an unsupported format",
        ErrorCategory.DATABASE, ErrorSeverity.ERROR, 500,
    ),
}


class SkinRequestError(SkinCacheError):
    """Skin resolution failed with a well-known kind."""

    def __init__(
        self,
        kind: SkinErrorKind,
        message: str | None = None,
        context: ErrorContext | None = None,
    ):
        default_message, category, severity, http_status = _KIND_DEFAULTS[kind]
        super().__init__(
            message or default_message, kind.value.upper(), category,
            severity, context, http_status,
        )
        self.kind = kind


class StorageError(SkinRequestError):
    """Persistence layer operation failed."""

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            SkinErrorKind.STORAGE_FAILURE,
            f"Storage {operation} failed: {message}", context,
        )
        self.operation = operation
