"""Path builder service.

ONLY storage path derivation - destination parsing, final key assembly,
uniqueness resolution and derived thumbnail keys.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from ...core.exceptions.path_exhausted import PathExhausted
from ...core.value_objects.storage_key import StorageKey
from .existence_checker import ExistenceChecker

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_ROOT = "uploads"
THUMBNAIL_DIRECTORY = "thumbnails"


class PathBuilder:
    """Derive final storage keys.
    
    Destinations ending in ``/``, or whose last segment has no extension,
    name a directory. Otherwise the last segment names the file and its
    parent is the directory.
    """
    
    def __init__(self, existence_checker: ExistenceChecker, max_attempts: int = 1000):
        self._existence_checker = existence_checker
        self._max_attempts = max_attempts
    
    @staticmethod
    def generate_destination(now: Optional[datetime] = None) -> str:
        """Date-partitioned default destination directory."""
        now = now or datetime.now(timezone.utc)
        return f"{DEFAULT_UPLOAD_ROOT}/{now:%Y/%m/%d}/"
    
    @staticmethod
    def split_destination(destination: str) -> Tuple[str, Optional[str]]:
        """Split a destination into ``(directory, filename)``.
        
        Returns:
            Normalized directory and the file name the destination names, if any
        """
        names_directory = destination.replace('\\', '/').rstrip().endswith('/')
        normalized = StorageKey.normalize(destination)
        if not normalized:
            return "", None
        
        directory, _, last = normalized.rpartition('/')
        if not names_directory and '.' in last.lstrip('.'):
            return directory, last
        return normalized, None
    
    @staticmethod
    def build_final_path(directory: str, filename: str, preserve_structure: bool = True) -> StorageKey:
        """Join directory and filename, or use the bare filename."""
        if preserve_structure:
            return StorageKey.from_components(directory, filename)
        return StorageKey(filename)
    
    async def ensure_unique(self, key: StorageKey) -> StorageKey:
        """Return ``key`` or the first free ``stem_N.ext`` variant.
        
        Raises:
            PathExhausted: If every variant up to the attempt bound exists
        """
        if not await self._existence_checker.exists(key.value):
            return key
        
        for counter in range(1, self._max_attempts + 1):
            candidate = key.with_counter(counter)
            if not await self._existence_checker.exists(candidate.value):
                logger.debug(f"Resolved collision for {key.value} as {candidate.value}")
                return candidate
        
        raise PathExhausted(
            message=f"Could not find a free path for {key.external} after {self._max_attempts} attempts",
            path=key.external,
            attempts=self._max_attempts,
        )
    
    @staticmethod
    def thumbnail_path(
        main_key: StorageKey,
        suffix: str,
        extension: str,
        directory: Optional[str] = None
    ) -> StorageKey:
        """``<dir>/thumbnails/<stem><suffix>.<ext>``, or ``<directory>/...`` when given."""
        name = f"{main_key.stem}{suffix}.{extension.lstrip('.')}"
        if directory:
            return StorageKey.from_components(directory, name)
        return StorageKey.from_components(main_key.directory, THUMBNAIL_DIRECTORY, name)
