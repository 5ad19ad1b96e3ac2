"""
Custom Exceptions for the trip inquiry service

This module defines custom exception classes used throughout the application
for better error handling and debugging. Every exception carries the HTTP
status code it is rendered with by the handlers in ``tripdesk.core.middleware``.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Authentication & Authorization
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    AUTHORIZATION_FAILED = "AUTHORIZATION_FAILED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_STATUS = "INVALID_STATUS"

    # Business logic errors
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the public error envelope"""
        body: Dict[str, Any] = {
            "success": False,
            "message": self.message,
            "errorCode": self.error_code.value,
        }
        field_errors = self.details.get("field_errors")
        if field_errors:
            body["errors"] = [
                {"field": field, "message": message}
                for field, messages in field_errors.items()
                for message in messages
            ]
        return body

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Request Errors
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 400
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)
        self.field_errors = field_errors or {}


class InvalidStatusError(ValidationError):
    """Exception raised when an inquiry status is not one of the known values"""

    def __init__(self, status: Any, allowed: Optional[List[str]] = None):
        allowed = allowed or []
        message = f"Invalid status: {status!r}"
        super().__init__(
            message,
            field_errors={"status": [f"Status must be one of: {', '.join(allowed)}"]},
            error_code=ErrorCode.INVALID_STATUS,
        )
        self.status = status


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


class InvalidTransitionError(BaseAppException):
    """Exception raised when a lifecycle change is refused for the current status"""

    def __init__(self, current_status: str, requested: str):
        message = f"Inquiry in status '{current_status}' cannot move to '{requested}'"
        details = {"current_status": current_status, "requested": requested}
        super().__init__(message, ErrorCode.INVALID_STATE_TRANSITION, details, 409)


# ========================================
# Authentication & Authorization Exceptions
# ========================================

class AuthenticationError(BaseAppException):
    """Exception raised when the caller cannot be identified"""

    def __init__(
        self,
        message: str = "Not authorized to access this route",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, ErrorCode.AUTHENTICATION_FAILED, details, 401)


class AuthorizationError(BaseAppException):
    """Exception raised when the caller is identified but not allowed"""

    def __init__(
        self,
        message: str = "Not authorized to access this resource",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, ErrorCode.AUTHORIZATION_FAILED, details, 403)


# ========================================
# Server Errors
# ========================================

class ServerError(BaseAppException):
    """Exception raised for unexpected failures"""

    def __init__(
        self,
        message: str = "Internal server error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, ErrorCode.INTERNAL_ERROR, details, 500)


class RepositoryError(ServerError):
    """Exception raised when the storage layer fails"""

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message)
        self.error_code = ErrorCode.DATABASE_ERROR


__all__ = [
    "ErrorCode",
    "BaseAppException",
    "ValidationError",
    "InvalidStatusError",
    "ResourceNotFoundError",
    "InvalidTransitionError",
    "AuthenticationError",
    "AuthorizationError",
    "ServerError",
    "RepositoryError",
]
