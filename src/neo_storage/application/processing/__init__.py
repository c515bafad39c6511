"""Per-MIME-family processing branches."""

from .context import PipelineStage, ProcessingContext
from .base import ProcessingBranch
from .passthrough_branch import PassthroughBranch
from .image_branch import ImageBranch, ImageOperation, select_image_operation
from .video_branch import VideoBranch, VIDEO_SKIPPED_WARNING, THUMBNAIL_SKIPPED_WARNING
from .router import TypeRouter

__all__ = [
    "PipelineStage",
    "ProcessingContext",
    "ProcessingBranch",
    "PassthroughBranch",
    "ImageBranch",
    "ImageOperation",
    "select_image_operation",
    "VideoBranch",
    "VIDEO_SKIPPED_WARNING",
    "THUMBNAIL_SKIPPED_WARNING",
    "TypeRouter",
]
