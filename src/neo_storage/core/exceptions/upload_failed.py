"""Upload failed exception.

ONLY upload failed - represents when a file upload operation fails
at any stage of the upload pipeline.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, Optional

from .base import StorageError


class UploadFailed(StorageError):
    """Raised when a file upload operation fails.
    
    This exception is the single error type surfaced by the upload pipeline.
    The failing stage and the original exception are preserved so callers
    can still distinguish a security rejection from a storage outage.
    """
    
    def __init__(
        self,
        message: str,
        destination: Optional[str] = None,
        filename: Optional[str] = None,
        upload_stage: Optional[str] = None,
        cause: Optional[BaseException] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize upload failed exception.
        
        Args:
            message: Human-readable error message
            destination: Destination path requested by the caller
            filename: Original filename being uploaded
            upload_stage: Pipeline stage where the upload failed
            cause: Original exception
            error_code: Specific error code for the failure
            details: Additional details about the failure
        """
        enhanced_details = details or {}
        if destination is not None:
            enhanced_details["destination"] = destination
        if filename:
            enhanced_details["filename"] = filename
        if upload_stage:
            enhanced_details["upload_stage"] = upload_stage
        if cause is not None:
            enhanced_details["cause_type"] = cause.__class__.__name__
            enhanced_details["cause_message"] = str(cause)
            cause_code = getattr(cause, "error_code", None)
            if cause_code:
                enhanced_details["cause_code"] = cause_code
        
        super().__init__(
            message=message,
            error_code=error_code or "UPLOAD_FAILED",
            details=enhanced_details
        )
        
        self.destination = destination
        self.filename = filename
        self.upload_stage = upload_stage
        self.cause = cause
