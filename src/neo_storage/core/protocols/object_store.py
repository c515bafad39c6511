"""Object store protocol.

ONLY object store contract - the key/value blob store the upload
pipeline writes to.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Optional
from typing_extensions import Protocol, runtime_checkable

from ..value_objects.object_stat import ObjectStat


@runtime_checkable
class ObjectStore(Protocol):
    """Key/value blob store.
    
    Keys are passed without a leading slash. Implementations may be
    eventually consistent: a just-written key can briefly report as absent.
    Implementations must be safe for concurrent use.
    """
    
    @property
    def bucket(self) -> str:
        """Default bucket used for writes."""
        ...
    
    async def write(self, key: str, content: bytes, content_type: str) -> None:
        """Store ``content`` under ``key`` with the given content type."""
        ...
    
    async def read(self, key: str) -> bytes:
        """Read the object stored under ``key``.
        
        Raises:
            FileNotFound: If the key does not exist
        """
        ...
    
    async def exists(self, key: str, bucket: Optional[str] = None) -> bool:
        """Check whether ``key`` exists.
        
        Args:
            key: Storage key
            bucket: Bucket to query, defaults to the store's bucket
        
        Returns:
            True if the object exists. Transient failures raise.
        """
        ...
    
    async def size(self, key: str) -> int:
        """Size of the stored object in bytes."""
        ...
    
    async def stat(self, key: str) -> ObjectStat:
        """Size, content type and last modification time of ``key``.
        
        Raises:
            FileNotFound: If the key does not exist
        """
        ...
    
    async def delete(self, key: str) -> bool:
        """Delete ``key``; returns True when the store accepted the delete."""
        ...
    
    async def presigned_url(self, key: str, ttl: int, bucket: Optional[str] = None) -> str:
        """Generate a time-limited signed GET URL.
        
        Args:
            key: Storage key
            ttl: Lifetime in seconds
            bucket: Bucket to sign for, defaults to the store's bucket
        """
        ...
