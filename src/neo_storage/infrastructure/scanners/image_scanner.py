"""Image security scanner.

ONLY image scanning - signature scanning for image content, with extra
active-content checks for SVG.

Following maximum separation architecture - one file = one purpose.
"""

import logging
import re
from typing import List, Optional

from ...core.value_objects.scan_result import ScanResult
from .pattern_scanner import PatternScanner

logger = logging.getLogger(__name__)


SVG_PATTERNS: List[str] = [
    r"javascript\s*:",
    r"\son[a-z]+\s*=",
    r"<foreignObject",
]


class ImageScanner(PatternScanner):
    """Scan images for embedded code; SVG is also checked for script hooks."""
    
    name = "image"
    
    def __init__(self, patterns: Optional[List[str]] = None, svg_patterns: Optional[List[str]] = None):
        super().__init__(patterns)
        self._svg_patterns = [
            (pattern, re.compile(pattern.encode(), re.IGNORECASE))
            for pattern in (SVG_PATTERNS if svg_patterns is None else svg_patterns)
        ]
    
    def scan(self, content: bytes, filename: str, mime_type: Optional[str] = None) -> ScanResult:
        result = super().scan(content, filename, mime_type)
        if not result.clean:
            return result
        
        if mime_type == "image/svg+xml":
            for pattern, compiled in self._svg_patterns:
                if compiled.search(content):
                    logger.warning(f"Active SVG content detected in {filename}: {pattern}")
                    return ScanResult.threat_found(self.name, "Active SVG content detected", pattern)
        
        return result
