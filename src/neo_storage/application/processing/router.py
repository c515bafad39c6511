"""Type router.

ONLY branch selection - maps a MIME family to its processing branch,
once per upload.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Optional

from ...core.value_objects.mime_type import MimeFamily, MimeType
from .base import ProcessingBranch


class TypeRouter:
    """Image and video files get their own branch; everything else passes through.
    
    Without a video branch, videos are uploaded verbatim.
    """
    
    def __init__(
        self,
        image_branch: ProcessingBranch,
        passthrough_branch: ProcessingBranch,
        video_branch: Optional[ProcessingBranch] = None
    ):
        self._image_branch = image_branch
        self._passthrough_branch = passthrough_branch
        self._video_branch = video_branch
    
    def select(self, mime_type: str) -> ProcessingBranch:
        family = MimeType(mime_type).family
        if family is MimeFamily.IMAGE:
            return self._image_branch
        if family is MimeFamily.VIDEO and self._video_branch is not None:
            return self._video_branch
        return self._passthrough_branch
