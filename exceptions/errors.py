"""
Custom exception classes for the application.

Every error raised by the service derives from AppError so routes can
turn it into the standard JSON error envelope.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        code: Error code (e.g., "UNAUTHORIZED")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class UnauthorizedError(AppError):
    """Caller failed the shared-secret check (401)."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            code="UNAUTHORIZED",
            message=message,
            status_code=401
        )


class MethodNotAllowedError(AppError):
    """HTTP verb not supported on this endpoint (405)."""

    def __init__(self, method: str, allowed: str = "POST"):
        super().__init__(
            code="METHOD_NOT_ALLOWED",
            message=f"{allowed} only",
            status_code=405,
            details={"method": method, "allowed": [allowed]}
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


# ===================
# SUPPLIER ERRORS
# ===================

class SupplierAuthError(ExternalServiceError):
    """Supplier rejected the API key or could not be reached for a token."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            service="cj",
            message=f"CJ auth failed: {message}",
            details=details
        )
        self.code = "CJ_AUTH_FAILED"


class SupplierRequestError(ExternalServiceError):
    """Transport-level failure talking to the supplier API."""

    def __init__(self, operation: str, message: str):
        super().__init__(
            service="cj",
            message=f"CJ {operation} request failed: {message}",
            details={"operation": operation}
        )
        self.code = "CJ_REQUEST_FAILED"
