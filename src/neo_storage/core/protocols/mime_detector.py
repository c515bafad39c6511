"""MIME detector protocol.

ONLY content sniffing contract - magic-number based MIME detection.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Optional
from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class MimeDetector(Protocol):
    def detect(self, content: bytes) -> Optional[str]:
        """Detect MIME type from content, None when undetermined."""
        ...
