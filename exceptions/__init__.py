"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,
    UnauthorizedError,
    MethodNotAllowedError,
    ExternalServiceError,

    # Supplier
    SupplierAuthError,
    SupplierRequestError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",
    "UnauthorizedError",
    "MethodNotAllowedError",
    "ExternalServiceError",

    # Supplier
    "SupplierAuthError",
    "SupplierRequestError",
]
