"""
Custom exceptions for the application
"""

class BaseAppException(Exception):
    """Base application exception"""
    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationError(BaseAppException):
    """Raised when client input fails validation"""
    pass


class ConfigurationError(BaseAppException):
    """Raised when required server configuration is missing"""
    pass


class ExternalServiceError(BaseAppException):
    """Raised when an external service answers with a non-success status"""
    def __init__(self, message: str, status_code: int, details: str = None):
        super().__init__(message, details)
        self.status_code = status_code
