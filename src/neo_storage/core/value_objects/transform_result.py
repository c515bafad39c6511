"""Transform result value object.

ONLY transform result - bytes produced by a content transformer together
with the format they are encoded in and processing metadata.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class TransformResult:
    """Output of an image transform."""
    
    content: bytes
    format: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    
    @property
    def size(self) -> int:
        return len(self.content)
