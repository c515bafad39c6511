"""File not found exception.

ONLY file not found - represents a referenced object that is absent
from the object store.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, Optional

from .base import ResourceNotFoundError


class FileNotFound(ResourceNotFoundError):
    """Raised when a storage key does not exist in the target bucket."""
    
    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        bucket: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize file not found exception.
        
        Args:
            message: Human-readable error message
            path: Storage path that was looked up
            bucket: Bucket that was queried
            error_code: Specific error code for the failure
            details: Additional details about the lookup
        """
        enhanced_details = details or {}
        if path:
            enhanced_details["path"] = path
        if bucket:
            enhanced_details["bucket"] = bucket
        
        super().__init__(
            message=message,
            error_code=error_code or "FILE_NOT_FOUND",
            details=enhanced_details
        )
        
        self.path = path
        self.bucket = bucket


NotFound = FileNotFound
