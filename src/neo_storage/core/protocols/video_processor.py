"""Video processor protocol.

ONLY video transcoding contract - backed by an external binary that may
be missing at runtime.

Following maximum separation architecture - one file = one purpose.
"""

from pathlib import Path
from typing import Any, Dict
from typing_extensions import Protocol, runtime_checkable

from ..value_objects.upload_options import VideoOptions, VideoThumbnailOptions


@runtime_checkable
class VideoProcessor(Protocol):
    """Video transcoder working on local files."""
    
    def is_available(self) -> bool:
        """True when the transcoder binaries can be executed."""
        ...
    
    async def transcode(self, input_path: Path, output_path: Path, options: VideoOptions) -> Dict[str, Any]:
        """Transcode ``input_path`` into ``output_path``.
        
        Returns:
            Processing metadata for the result record
        
        Raises:
            TranscoderUnavailable: If the binaries are missing
            ProcessingFailed: If the transcoder exits with an error
        """
        ...
    
    async def capture_frame(self, input_path: Path, output_path: Path, options: VideoThumbnailOptions) -> None:
        """Write a single JPEG frame taken at ``options.time``."""
        ...
    
    async def probe(self, path: Path) -> Dict[str, Any]:
        """Duration, bitrate, format plus video/audio stream information."""
        ...
