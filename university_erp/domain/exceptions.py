"""Domain-specific exceptions mapped onto HTTP error responses"""

from typing import Any, Optional


class DomainException(Exception):
    """Base exception for domain layer"""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        error = {"code": self.code, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return error


class ValidationError(DomainException):
    """Input or business-rule validation failed"""

    status_code = 400
    code = "VALIDATION_ERROR"


class AuthenticationError(DomainException):
    """Caller could not be authenticated"""

    status_code = 401
    code = "AUTHENTICATION_ERROR"

    def __init__(self, message: str = "Authentication required", details: Optional[Any] = None):
        super().__init__(message, details)


class AuthorizationError(DomainException):
    """Caller is authenticated but not allowed to perform the action"""

    status_code = 403
    code = "AUTHORIZATION_ERROR"

    def __init__(self, message: str = "Insufficient permissions", details: Optional[Any] = None):
        super().__init__(message, details)


class NotFoundError(DomainException):
    """Requested resource does not exist"""

    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found")
        self.resource = resource


class ConflictError(DomainException):
    """Resource already exists or conflicts with current state"""

    status_code = 409
    code = "CONFLICT"
