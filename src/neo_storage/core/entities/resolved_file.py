"""Resolved file entity.

ONLY resolved file - the introspected form of an upload source that every
later pipeline stage works from.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass

from ..value_objects.mime_type import MimeType


@dataclass(frozen=True)
class ResolvedFile:
    """Raw content plus the name, MIME type and extension derived from it."""
    
    content: bytes
    original_name: str
    mime_type: str
    extension: str
    
    @property
    def size(self) -> int:
        return len(self.content)
    
    @property
    def mime(self) -> MimeType:
        return MimeType(self.mime_type)
