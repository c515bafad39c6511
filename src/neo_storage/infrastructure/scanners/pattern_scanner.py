"""Pattern security scanner.

ONLY pattern scanning - matches raw content against case-insensitive
signatures of embedded server-side code and shell calls.

Following maximum separation architecture - one file = one purpose.
"""

import logging
import re
from typing import Dict, List, Optional

from ...core.value_objects.scan_result import ScanResult

logger = logging.getLogger(__name__)


DEFAULT_PATTERNS: List[str] = [
    r"<\?php",
    r"<\?\s",
    r"<\?=",
    r"<script",
    r"eval\s*\(",
    r"exec\s*\(",
    r"system\s*\(",
    r"shell_exec\s*\(",
    r"passthru\s*\(",
    r"file_get_contents\s*\(",
    r"file_put_contents\s*\(",
    r"fopen\s*\(",
    r"fwrite\s*\(",
    r"include\s*\(",
    r"require\s*\(",
]


class PatternScanner:
    """Generic signature scanner used for files without a dedicated scanner."""
    
    name = "generic"
    
    def __init__(self, patterns: Optional[List[str]] = None):
        self._patterns: Dict[str, re.Pattern] = {}
        for pattern in (DEFAULT_PATTERNS if patterns is None else patterns):
            self.add_pattern(pattern)
    
    @property
    def patterns(self) -> List[str]:
        return list(self._patterns)
    
    def add_pattern(self, pattern: str, flags: int = re.IGNORECASE) -> None:
        """Register an additional signature (a regular expression over bytes)."""
        self._patterns[pattern] = re.compile(pattern.encode(), flags)
    
    def remove_pattern(self, pattern: str) -> None:
        self._patterns.pop(pattern, None)
    
    def match(self, content: bytes) -> Optional[str]:
        """Return the first signature found in ``content``."""
        for pattern, compiled in self._patterns.items():
            if compiled.search(content):
                return pattern
        return None
    
    def scan(self, content: bytes, filename: str, mime_type: Optional[str] = None) -> ScanResult:
        pattern = self.match(content)
        if pattern is not None:
            logger.warning(f"Malicious pattern detected in {filename}: {pattern}")
            return ScanResult.threat_found(self.name, "Malicious content detected", pattern)
        return ScanResult.ok(self.name)
