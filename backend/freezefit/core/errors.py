"""Error Hierarchy - typed, categorized exceptions for every FreezeFit failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) carry a user-facing message; 500-level errors never
      expose internal details (message is always "Internal server error")
    - to_response() produces the failure envelope: {success: false, error, code}

Design Decisions:
    - Single hierarchy with FreezeFitError base: one global handler catches all
    - ErrorContext as dataclass: carries resource/record ids into logs without
      coupling to the logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

INTERNAL_ERROR_MESSAGE = "Internal server error"
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed"


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    ROUTING = "routing"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs only (never serialized to clients)."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource: str | None = None
    record_id: str | None = None
    debug_info: dict[str, Any] | None = None


class FreezeFitError(Exception):
    """Base exception for all FreezeFit errors."""

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
        """Convert to the failure envelope."""
        return {"success": False, "error": self.message, "code": self.code}


# ─── Client Errors (400-level) ──────────────────────────────────

class MissingFieldError(FreezeFitError):
    """One or more required fields absent from a request body."""
    def __init__(self, fields: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"{_join_fields(fields)} {'is' if len(fields) == 1 else 'are'} required",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.fields = fields


class NoFieldsToUpdateError(FreezeFitError):
    """Update body contained no writable field."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No valid fields to update", "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )


class BusinessRuleError(FreezeFitError):
    """Request is well-formed but violates a domain rule."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )


class ResourceNotFoundError(FreezeFitError):
    """Requested row does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource = ctx.resource or resource_type
        ctx.record_id = ctx.record_id or resource_id
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.resource_id = resource_id


class MethodNotAllowedError(FreezeFitError):
    """No operation matches the method/path combination."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            METHOD_NOT_ALLOWED_MESSAGE, "METHOD_NOT_ALLOWED", ErrorCategory.ROUTING,
            ErrorSeverity.INFO, context, 405,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class DatabaseError(FreezeFitError):
    """Database operation failed. Detail goes to the log, not the client."""
    def __init__(self, detail: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            INTERNAL_ERROR_MESSAGE, "INTERNAL_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.detail = detail
        self.operation = operation


class InternalError(FreezeFitError):
    """Anything else that went wrong on the server."""
    def __init__(self, detail: str = "", context: ErrorContext | None = None):
        super().__init__(
            INTERNAL_ERROR_MESSAGE, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.detail = detail


def _join_fields(fields: list[str]) -> str:
    if len(fields) <= 1:
        return "".join(fields)
    if len(fields) == 2:
        return f"{fields[0]} and {fields[1]}"
    return ", ".join(fields[:-1]) + f", and {fields[-1]}"
