"""Slug naming strategy.

ONLY slug naming - readable filenames from the original stem plus a
Unix timestamp.

Following maximum separation architecture - one file = one purpose.
"""

import re
import time
from pathlib import PurePosixPath
from typing import Callable, Optional

_INVALID_CHARS = re.compile(r"[^a-z0-9-]")
_REPEATED_HYPHENS = re.compile(r"-+")

FALLBACK_SLUG = "file"


class SlugNamer:
    """Name files as ``<slug>-<unix seconds>.<ext>``."""
    
    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """Initialize slug namer.
        
        Args:
            clock: Returns the current Unix time, ``time.time`` by default
        """
        self._clock = clock or time.time
    
    @staticmethod
    def slugify(value: str) -> str:
        """Lower-case, replace anything outside ``[a-z0-9-]`` and collapse hyphens."""
        slug = _INVALID_CHARS.sub("-", value.lower())
        slug = _REPEATED_HYPHENS.sub("-", slug).strip("-")
        return slug or FALLBACK_SLUG
    
    def generate(self, original_name: str, content: bytes, extension: str) -> str:
        stem = PurePosixPath(original_name.replace("\\", "/")).stem
        name = f"{self.slugify(stem)}-{int(self._clock())}"
        extension = extension.lstrip('.')
        return f"{name}.{extension}" if extension else name
