"""Magic-number MIME detector.

ONLY content sniffing - libmagic-backed MIME detection through
python-magic.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class MagicMimeDetector:
    """Detect MIME types from content with libmagic.
    
    python-magic is imported on first use so that hosts without the
    libmagic shared library can still import the package.
    """
    
    def __init__(self):
        self._magic = None
    
    def _get_magic(self):
        if self._magic is None:
            try:
                import magic
            except ImportError as e:
                msg = "python-magic and the libmagic library are required for MIME detection. Install with: pip install python-magic"
                raise ImportError(msg) from e
            self._magic = magic.Magic(mime=True)
        return self._magic
    
    def detect(self, content: bytes) -> Optional[str]:
        """Detect MIME type from content, None when libmagic returns nothing."""
        mime_type = self._get_magic().from_buffer(content)
        logger.debug(f"Detected MIME type {mime_type} for {len(content)} bytes")
        return mime_type or None
