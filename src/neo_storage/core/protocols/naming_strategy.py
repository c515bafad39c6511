"""Naming strategy protocol.

ONLY naming contract - turns an original filename plus content into the
name used for the stored object.

Following maximum separation architecture - one file = one purpose.
"""

from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class NamingStrategy(Protocol):
    """Filename generator."""
    
    def generate(self, original_name: str, content: bytes, extension: str) -> str:
        """Generate the stored filename.
        
        Args:
            original_name: Display name of the source
            content: Raw file bytes
            extension: Resolved extension without the dot
        """
        ...
