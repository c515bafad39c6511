"""Scan result value object.

ONLY scan result - outcome of one security scanner run.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ScanResult:
    """Outcome of a content scan."""
    
    clean: bool
    scanner: str
    threat: Optional[str] = None
    pattern: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    skipped: bool = False
    
    @classmethod
    def ok(cls, scanner: str, warnings: Optional[List[str]] = None) -> "ScanResult":
        return cls(clean=True, scanner=scanner, warnings=warnings or [])
    
    @classmethod
    def threat_found(cls, scanner: str, threat: str, pattern: Optional[str] = None) -> "ScanResult":
        return cls(clean=False, scanner=scanner, threat=threat, pattern=pattern)
    
    @classmethod
    def skip(cls, scanner: str, reason: str) -> "ScanResult":
        return cls(clean=True, scanner=scanner, warnings=[reason], skipped=True)
