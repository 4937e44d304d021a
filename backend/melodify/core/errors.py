"""Error Hierarchy: typed, categorized exceptions for every Melodify failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) carry the message shown to the caller
    - Backend errors (500-level) pass the remote message through verbatim
    - to_response() produces the REST envelope {"error": <message>}

Design Decisions:
    - Single hierarchy with MelodifyError base: one global handler maps all of them
"""

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
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


class MelodifyError(Exception):
    """Base exception for all Melodify errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error body."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class BadRequestError(MelodifyError):
    """Required field missing or request otherwise unusable."""
    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.fields = fields or []


class AuthProviderError(MelodifyError):
    """Identity provider rejected the request (duplicate email, bad credentials)."""
    def __init__(self, message: str):
        super().__init__(
            message, "AUTH_PROVIDER_REJECTED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 400,
        )


class UnauthorizedError(MelodifyError):
    """Bearer token missing or not accepted by the identity provider."""
    def __init__(self, message: str):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )


class NotFoundError(MelodifyError):
    """Referenced resource does not exist."""
    def __init__(self, message: str):
        super().__init__(
            message, "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )


# ─── Backend Errors (500-level) ─────────────────────────────────

class BackendError(MelodifyError):
    """A call to the managed backend (tables, storage, auth) failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            message, "BACKEND_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation
