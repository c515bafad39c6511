"""Processing failed exception.

ONLY processing failed - represents a content transformer (image or
video) that could not produce output.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, Optional

from .base import StorageError


class ProcessingFailed(StorageError):
    """Raised when an image or video transformation fails."""
    
    def __init__(
        self,
        message: str,
        processor: Optional[str] = None,
        operation: Optional[str] = None,
        return_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        if processor:
            enhanced_details["processor"] = processor
        if operation:
            enhanced_details["operation"] = operation
        if return_code is not None:
            enhanced_details["return_code"] = return_code
        
        super().__init__(
            message=message,
            error_code=error_code or "PROCESSING_FAILED",
            details=enhanced_details
        )
        
        self.processor = processor
        self.operation = operation
        self.return_code = return_code
