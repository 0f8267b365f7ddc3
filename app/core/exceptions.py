from typing import Optional, Any

class VoterRegError(Exception):
    """
    Base exception for the registration backend.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class ValidationError(VoterRegError):
    """
    Raised when a request field is missing or malformed.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)

class ConflictError(VoterRegError):
    """
    Raised when an Aadhaar card or phone number is already registered.
    `field` names the colliding key so callers can tell them apart.
    """
    def __init__(self, message: str, field: str, details: Optional[Any] = None):
        self.field = field
        super().__init__(message, code="CONFLICT", status_code=400, details=details or {"field": field})

class AuthError(VoterRegError):
    """
    Raised when login credentials are rejected. Never says which part was wrong.
    """
    def __init__(self, message: str = "Invalid email or password", details: Optional[Any] = None):
        super().__init__(message, code="INVALID_CREDENTIALS", status_code=401, details=details)

class NotFoundError(VoterRegError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)

class ProviderError(VoterRegError):
    """
    Raised when the SMS OTP provider reports a failure.
    """
    def __init__(self, message: str = "OTP provider error", details: Optional[Any] = None):
        super().__init__(message, code="PROVIDER_ERROR", status_code=400, details=details)

class UnexpectedError(VoterRegError):
    """
    Raised on storage or network faults. The message stays generic.
    """
    def __init__(self, message: str = "Server error", details: Optional[Any] = None):
        super().__init__(message, code="INTERNAL_ERROR", status_code=500, details=details)
