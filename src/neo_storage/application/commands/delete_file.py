"""Delete file command.

ONLY file deletion - removes a stored object, reporting failure as False
instead of raising.

Following maximum separation architecture - one file = one purpose.
"""

import logging

from ...core.protocols.object_store import ObjectStore

logger = logging.getLogger(__name__)


class DeleteFileCommand:
    def __init__(self, object_store: ObjectStore):
        self._object_store = object_store
    
    async def execute(self, path: str) -> bool:
        """Delete ``path``; any storage error is logged and returns False."""
        key = path.lstrip('/')
        try:
            deleted = await self._object_store.delete(key)
        except Exception as e:
            logger.error(f"Delete failed: path=/{key}, error={e}")
            return False
        
        logger.info(f"Deleted /{key}")
        return deleted
