"""Document security scanner.

ONLY document scanning - macro, auto-run and embedded-payload signatures
for office documents, PDFs and plain text.

Following maximum separation architecture - one file = one purpose.
"""

import logging
import re
from typing import List, Optional

from ...core.value_objects.mime_type import DOCUMENT_TYPES
from ...core.value_objects.scan_result import ScanResult
from .pattern_scanner import PatternScanner

logger = logging.getLogger(__name__)


DOCUMENT_PATTERNS: List[str] = [
    # VBA macros
    r"Sub\s+\w+\s*\(",
    r"Function\s+\w+\s*\(",
    r"Private\s+Sub",
    r"Public\s+Sub",
    r"Auto_Open",
    r"Auto_Close",
    r"Workbook_Open",
    r"Document_Open",
    # Object creation and shell access
    r"CreateObject\s*\(",
    r"GetObject\s*\(",
    r"Shell\s*\(",
    r"WScript\.",
    r"Scripting\.",
    # PDF actions
    r"/JavaScript\s*\(",
    r"/JS\s*\(",
    r"/OpenAction",
    r"/Launch",
    r"/EmbeddedFile",
    # Living-off-the-land binaries
    r"cmd\.exe",
    r"powershell",
    r"mshta",
    r"regsvr32",
    r"rundll32",
]

PDF_EMBEDDED_FILES = re.compile(rb"/EmbeddedFiles")
PDF_FORM_JAVASCRIPT = re.compile(rb"/AcroForm.*/JavaScript", re.DOTALL)
OFFICE_VBA_PROJECT = re.compile(rb"vbaProject\.bin", re.IGNORECASE)
OFFICE_EXTERNAL_LINK = re.compile(rb"https?://[^\s\"'<>]+", re.IGNORECASE)

OOXML_PREFIX = "application/vnd.openxmlformats-officedocument"


class DocumentScanner(PatternScanner):
    """Scanner for documents.
    
    Documents larger than ``max_file_size`` are not scanned.
    """
    
    name = "document"
    
    def __init__(self, max_file_size: int = 10 * 1024 * 1024, patterns: Optional[List[str]] = None):
        super().__init__(DOCUMENT_PATTERNS if patterns is None else patterns)
        self._max_file_size = max_file_size
    
    @staticmethod
    def is_document(mime_type: Optional[str]) -> bool:
        return bool(mime_type) and mime_type.split(';')[0].strip().lower() in DOCUMENT_TYPES
    
    def scan(self, content: bytes, filename: str, mime_type: Optional[str] = None) -> ScanResult:
        if len(content) > self._max_file_size:
            logger.info(f"Skipping document scan for {filename}: {len(content)} bytes exceeds {self._max_file_size}")
            return ScanResult.skip(self.name, f"Document too large to scan: {len(content)} bytes")
        
        result = super().scan(content, filename, mime_type)
        if not result.clean:
            return result
        
        if mime_type == "application/pdf":
            return self._scan_pdf(content, filename)
        if mime_type and mime_type.startswith(OOXML_PREFIX):
            return self._scan_office(content, filename)
        return result
    
    def _scan_pdf(self, content: bytes, filename: str) -> ScanResult:
        if PDF_EMBEDDED_FILES.search(content):
            logger.warning(f"PDF with embedded files rejected: {filename}")
            return ScanResult.threat_found(self.name, "PDF contains embedded files", "/EmbeddedFiles")
        if PDF_FORM_JAVASCRIPT.search(content):
            logger.warning(f"PDF form with JavaScript rejected: {filename}")
            return ScanResult.threat_found(self.name, "PDF form contains JavaScript", "/AcroForm.*/JavaScript")
        return ScanResult.ok(self.name)
    
    def _scan_office(self, content: bytes, filename: str) -> ScanResult:
        if OFFICE_VBA_PROJECT.search(content):
            logger.warning(f"Office document with VBA project rejected: {filename}")
            return ScanResult.threat_found(self.name, "Office document contains macros", "vbaProject.bin")
        
        warnings = []
        if OFFICE_EXTERNAL_LINK.search(content):
            logger.warning(f"Office document contains external links: {filename}")
            warnings.append("Document contains external links")
        return ScanResult.ok(self.name, warnings)
