"""Content scanner protocol.

ONLY content scanning contract - pattern/signature scanners consulted by
the security gate.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Optional
from typing_extensions import Protocol, runtime_checkable

from ..value_objects.scan_result import ScanResult


@runtime_checkable
class ContentScanner(Protocol):
    """Security scanner for raw file content."""
    
    name: str
    
    def scan(self, content: bytes, filename: str, mime_type: Optional[str] = None) -> ScanResult:
        """Scan content for threats.
        
        Args:
            content: Raw file bytes
            filename: Display name, used for logging and reporting
            mime_type: Detected MIME type when known
        
        Returns:
            Scan result; ``clean`` is False when a threat was found
        """
        ...
