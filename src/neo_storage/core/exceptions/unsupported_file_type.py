"""Unsupported file type exception.

ONLY unsupported file type - represents a file whose extension is not
present in the configured allow-list.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, List, Optional

from .base import ValidationError


class UnsupportedFileType(ValidationError):
    """Raised when a file extension is not allow-listed."""
    
    def __init__(
        self,
        message: str,
        extension: Optional[str] = None,
        mime_type: Optional[str] = None,
        allowed_extensions: Optional[List[str]] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize unsupported file type exception.
        
        Args:
            message: Human-readable error message
            extension: Rejected extension
            mime_type: Detected MIME type of the rejected file
            allowed_extensions: Union of allowed extensions at validation time
            error_code: Specific error code for the failure
            details: Additional details about the failure
        """
        enhanced_details = details or {}
        if extension is not None:
            enhanced_details["extension"] = extension
        if mime_type:
            enhanced_details["mime_type"] = mime_type
        if allowed_extensions:
            enhanced_details["allowed_extensions"] = sorted(allowed_extensions)
        
        super().__init__(
            message=message,
            error_code=error_code or "UNSUPPORTED_FILE_TYPE",
            details=enhanced_details
        )
        
        self.extension = extension
        self.mime_type = mime_type
        self.allowed_extensions = allowed_extensions or []
