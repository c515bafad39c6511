"""Invalid source exception.

ONLY invalid source - represents an upload source that cannot be read
or does not match any supported source shape.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, Optional

from .base import ValidationError


class InvalidSource(ValidationError):
    """Raised when the upload source is unreadable or of an unsupported shape."""
    
    def __init__(
        self,
        message: str,
        source_type: Optional[str] = None,
        source_path: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        if source_type:
            enhanced_details["source_type"] = source_type
        if source_path:
            enhanced_details["source_path"] = source_path
        
        super().__init__(
            message=message,
            error_code=error_code or "INVALID_SOURCE",
            details=enhanced_details
        )
        
        self.source_type = source_type
        self.source_path = source_path
