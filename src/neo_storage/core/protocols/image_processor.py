"""Image processor protocol.

ONLY image transformation contract - resize, compress, watermark and
thumbnail operations used by the image branch.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict
from typing_extensions import Protocol, runtime_checkable

from ..value_objects.transform_result import TransformResult
from ..value_objects.upload_options import (
    CompressionOptions,
    ImageOptions,
    ThumbnailOptions,
    WebOptimizationOptions,
)


@runtime_checkable
class ImageProcessor(Protocol):
    """Image transformer.
    
    Every transform returns the encoded bytes, the format they are encoded
    in, and processing metadata.
    """
    
    def process(self, content: bytes, options: ImageOptions) -> TransformResult:
        """General processing: orientation, bounds, resize, watermark, conversion."""
        ...
    
    def compress(self, content: bytes, options: CompressionOptions) -> TransformResult:
        """Quality search toward an optional target byte size."""
        ...
    
    def optimize_for_web(self, content: bytes, options: WebOptimizationOptions) -> TransformResult:
        """Resize to bounds and recompress for web delivery."""
        ...
    
    def create_thumbnail(self, content: bytes, options: ThumbnailOptions, default_format: str) -> TransformResult:
        """Produce a thumbnail; ``default_format`` applies when options name none."""
        ...
    
    def get_image_info(self, content: bytes) -> Dict[str, Any]:
        """Dimensions and size information for stored images."""
        ...
