"""Path exhausted exception.

ONLY path exhausted - represents a uniqueness resolution that ran out
of suffix attempts.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, Optional

from .base import StorageError


class PathExhausted(StorageError):
    """Raised when no free storage key was found within the attempt bound."""
    
    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        attempts: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        if path:
            enhanced_details["path"] = path
        if attempts is not None:
            enhanced_details["attempts"] = attempts
        
        super().__init__(
            message=message,
            error_code=error_code or "PATH_EXHAUSTED",
            details=enhanced_details
        )
        
        self.path = path
        self.attempts = attempts
