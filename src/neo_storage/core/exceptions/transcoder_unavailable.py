"""Transcoder unavailable exception.

ONLY transcoder unavailable - represents a missing external video
transcoder binary.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, Optional

from .base import ServiceUnavailableError


class TranscoderUnavailable(ServiceUnavailableError):
    """Raised when the ffmpeg/ffprobe binaries cannot be resolved.
    
    The upload pipeline treats this as soft and records a warning instead.
    """
    
    def __init__(
        self,
        message: str,
        binary: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        if binary:
            enhanced_details["binary"] = binary
        
        super().__init__(
            message=message,
            error_code=error_code or "TRANSCODER_UNAVAILABLE",
            details=enhanced_details
        )
        
        self.binary = binary
