"""Pattern-based content scanners."""

from .pattern_scanner import PatternScanner, DEFAULT_PATTERNS
from .image_scanner import ImageScanner, SVG_PATTERNS
from .document_scanner import DocumentScanner, DOCUMENT_PATTERNS

__all__ = [
    "PatternScanner",
    "DEFAULT_PATTERNS",
    "ImageScanner",
    "SVG_PATTERNS",
    "DocumentScanner",
    "DOCUMENT_PATTERNS",
]
