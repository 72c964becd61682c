from typing import Optional, Any


class AccountError(Exception):
    """
    Base exception for the account service.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class InvalidInputError(AccountError):
    """
    Raised when a request field is missing or malformed.
    """
    def __init__(self, message: str = "Invalid input", details: Optional[Any] = None):
        super().__init__(message, code="INVALID_INPUT", status_code=400, details=details)


class AuthenticationError(AccountError):
    """
    Raised when credentials or a session token are rejected.
    """
    def __init__(self, message: str = "Authentication failed", details: Optional[Any] = None):
        super().__init__(message, code="UNAUTHENTICATED", status_code=401, details=details)


class ConflictError(AccountError):
    """
    Raised when a record with the same natural key already exists.
    """
    def __init__(self, message: str = "Resource already exists", details: Optional[Any] = None):
        super().__init__(message, code="CONFLICT", status_code=400, details=details)


class ResourceNotFoundError(AccountError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)


class InternalError(AccountError):
    """
    Raised when the store or another dependency fails unexpectedly.
    """
    def __init__(self, message: str = "Internal server error", details: Optional[Any] = None):
        super().__init__(message, code="INTERNAL_ERROR", status_code=500, details=details)
