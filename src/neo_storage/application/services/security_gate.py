"""Security gate service.

ONLY security dispatch - runs exactly one type-appropriate scanner per
file and turns a detected threat into ``SecurityThreat``.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Optional

from ...config.settings import SecuritySettings
from ...core.exceptions.security_threat import SecurityThreat
from ...core.protocols.content_scanner import ContentScanner
from ...core.value_objects.mime_type import MimeFamily, MimeType
from ...core.value_objects.scan_result import ScanResult

logger = logging.getLogger(__name__)


class SecurityGate:
    """Dispatch scans by MIME family.
    
    Images go to the image scanner, documents to the document scanner and
    everything else to the generic scanner. Images and documents are not
    scanned at all while ``scan_images`` or ``scan_documents`` is off.
    """
    
    def __init__(
        self,
        image_scanner: ContentScanner,
        document_scanner: ContentScanner,
        generic_scanner: ContentScanner,
        settings: Optional[SecuritySettings] = None
    ):
        self._image_scanner = image_scanner
        self._document_scanner = document_scanner
        self._generic_scanner = generic_scanner
        self._settings = settings or SecuritySettings()
    
    def select_scanner(self, mime_type: str) -> Optional[ContentScanner]:
        """Return the scanner for ``mime_type``, or None when its category is switched off."""
        family = MimeType(mime_type).family
        if family is MimeFamily.IMAGE:
            return self._image_scanner if self._settings.scan_images else None
        if family is MimeFamily.DOCUMENT:
            return self._document_scanner if self._settings.scan_documents else None
        return self._generic_scanner
    
    def scan(self, content: bytes, filename: str, mime_type: str, enabled: bool) -> Optional[ScanResult]:
        """Scan content when ``enabled``.
        
        Args:
            content: Bytes to scan
            filename: Display name for reporting
            mime_type: Detected MIME type
            enabled: The upload's ``scan`` option
            
        Returns:
            Scan result, or None when scanning is disabled for this upload
            or for the file's category
            
        Raises:
            SecurityThreat: If a threat is found or the scanner itself fails
        """
        if not enabled:
            return None
        
        scanner = self.select_scanner(mime_type)
        if scanner is None:
            logger.debug(f"Security scan skipped for {filename}: {mime_type} scanning is disabled")
            return None
        
        try:
            result = scanner.scan(content, filename, mime_type)
        except Exception as e:
            logger.error(f"Security scan failed for {filename} ({scanner.name}): {e}")
            raise SecurityThreat(
                message=f"Security scan failed for file: {filename}",
                filename=filename,
                threat="scan_error",
                scanner=scanner.name,
                details={"original_error": str(e)},
            ) from e
        
        if not result.clean:
            raise SecurityThreat(
                message=f"Security threat detected in file: {filename}",
                filename=filename,
                threat=result.threat,
                pattern=result.pattern,
                scanner=result.scanner,
            )
        
        logger.debug(f"Security scan passed for {filename} ({scanner.name})")
        return result
