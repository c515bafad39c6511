"""Get file metadata query.

ONLY metadata retrieval - object stat plus type-specific details
(image dimensions, video probe data) for a stored file.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from ...core.exceptions.file_not_found import FileNotFound
from ...core.protocols.image_processor import ImageProcessor
from ...core.protocols.object_store import ObjectStore
from ...core.protocols.video_processor import VideoProcessor
from ...core.value_objects.mime_type import MimeType
from ...core.value_objects.storage_key import StorageKey
from ..services.existence_checker import ExistenceChecker

logger = logging.getLogger(__name__)

FALLBACK_MIME_TYPE = "application/octet-stream"
VIDEO_UNAVAILABLE_NOTE = "Install FFmpeg for detailed video metadata"
VIDEO_TOO_LARGE_NOTE = "Video exceeds the metadata probe size limit"


class GetFileMetadataQuery:
    """Query to get file metadata.
    
    Type-specific fields are best-effort: a failing image decode or video
    probe is logged and the base fields are still returned.
    """
    
    def __init__(
        self,
        object_store: ObjectStore,
        existence_checker: ExistenceChecker,
        image_processor: ImageProcessor,
        video_processor: Optional[VideoProcessor] = None,
        probe_max_size: int = 50 * 1024 * 1024
    ):
        """Initialize get file metadata query.
        
        Args:
            object_store: Store holding the file
            existence_checker: Retrying existence probe
            image_processor: Reads image dimensions
            video_processor: Probes videos, None when not configured
            probe_max_size: Videos above this size are not downloaded for probing
        """
        self._object_store = object_store
        self._existence_checker = existence_checker
        self._image_processor = image_processor
        self._video_processor = video_processor
        self._probe_max_size = probe_max_size
    
    async def execute(self, path: str) -> Dict[str, Any]:
        """Execute file metadata retrieval.
        
        Args:
            path: Stored file path, leading slash optional
            
        Returns:
            ``{path, file_name, size, mime_type, last_modified}`` plus
            type-specific fields
            
        Raises:
            FileNotFound: If the file doesn't exist
        """
        key = StorageKey(path)
        if not await self._existence_checker.exists(key.value):
            raise FileNotFound(message=f"File not found: {key.external}", path=key.external)
        
        stat = await self._object_store.stat(key.value)
        mime_type = MimeType(stat.content_type or FALLBACK_MIME_TYPE)
        
        metadata: Dict[str, Any] = {
            "path": key.external,
            "file_name": key.name,
            "size": stat.size,
            "mime_type": mime_type.value,
            "last_modified": stat.last_modified.isoformat() if stat.last_modified else None,
        }
        
        if mime_type.is_image():
            metadata.update(await self._image_metadata(key))
        elif mime_type.is_video():
            metadata.update(await self._video_metadata(key, stat.size))
        
        return metadata
    
    async def _image_metadata(self, key: StorageKey) -> Dict[str, Any]:
        try:
            content = await self._object_store.read(key.value)
            return await asyncio.to_thread(self._image_processor.get_image_info, content)
        except Exception as e:
            logger.warning(f"Could not read image metadata for {key.external}: {e}")
            return {}
    
    async def _video_metadata(self, key: StorageKey, size: int) -> Dict[str, Any]:
        if self._video_processor is None or not self._video_processor.is_available():
            return {"video_processing_available": False, "note": VIDEO_UNAVAILABLE_NOTE}
        
        if size >= self._probe_max_size:
            return {"video_processing_available": True, "note": VIDEO_TOO_LARGE_NOTE}
        
        try:
            content = await self._object_store.read(key.value)
            with tempfile.TemporaryDirectory(prefix="neo-storage-") as temp_dir:
                video_path = Path(temp_dir) / f"probe.{key.extension or 'bin'}"
                await asyncio.to_thread(video_path.write_bytes, content)
                probe = await self._video_processor.probe(video_path)
        except Exception as e:
            logger.warning(f"Could not probe video metadata for {key.external}: {e}")
            return {}
        
        return {"video_processing_available": True, "video_info": probe}
