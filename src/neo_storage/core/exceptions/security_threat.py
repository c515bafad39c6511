"""Security threat exception.

ONLY security threat - represents content rejected by a security scanner.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, Optional

from .base import SecurityError


class SecurityThreat(SecurityError):
    """Raised when a scanner rejects file content.
    
    Always fatal for the upload and never retried.
    """
    
    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        threat: Optional[str] = None,
        pattern: Optional[str] = None,
        scanner: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize security threat exception.
        
        Args:
            message: Human-readable error message
            filename: Name of the rejected file
            threat: Short description of the detected threat
            pattern: Signature that matched, when pattern based
            scanner: Name of the scanner that rejected the content
            error_code: Specific error code for the failure
            details: Additional details about the threat
        """
        enhanced_details = details or {}
        if filename:
            enhanced_details["filename"] = filename
        if threat:
            enhanced_details["threat"] = threat
        if pattern:
            enhanced_details["pattern"] = pattern
        if scanner:
            enhanced_details["scanner"] = scanner
        
        super().__init__(
            message=message,
            error_code=error_code or "SECURITY_THREAT",
            details=enhanced_details
        )
        
        self.filename = filename
        self.threat = threat
        self.pattern = pattern
        self.scanner = scanner
