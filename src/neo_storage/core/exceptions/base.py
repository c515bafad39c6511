"""Base exceptions for neo-storage.

Every failure raised by the upload pipeline and its collaborators derives
from NeoStorageError and carries an error code plus a details mapping that
the HTTP layer renders unchanged.
"""

from typing import Any, Dict, Optional


class NeoStorageError(Exception):
    """Base exception for all neo-storage errors.
    
    ``error_code`` defaults to the class name; ``details`` is always a dict.
    """
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ValidationError(NeoStorageError):
    """Raised when input validation fails."""
    pass


class SecurityError(NeoStorageError):
    """Base class for security-related errors."""
    pass


class ResourceNotFoundError(NeoStorageError):
    """Raised when required resource is not found."""
    pass


class StorageError(NeoStorageError):
    """Base class for storage and processing failures."""
    pass


class ServiceUnavailableError(NeoStorageError):
    """Raised when an external collaborator is not available."""
    pass


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.
    
    Args:
        exception: The exception instance
        
    Returns:
        HTTP status code
    """
    from .http_mapping import get_http_status_code as get_mapped_status_code
    return get_mapped_status_code(exception)


def create_error_response(exception: NeoStorageError) -> Dict[str, Any]:
    """Create standardized error response from exception.
    
    Args:
        exception: The neo-storage exception
        
    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
