"""Content transformers: Pillow images and ffmpeg videos."""

from .image_processor import PillowImageProcessor, QUALITY_PRESETS, determine_quality
from .video_processor import FfmpegVideoProcessor
from .watermark import Watermarker

__all__ = [
    "PillowImageProcessor",
    "QUALITY_PRESETS",
    "determine_quality",
    "FfmpegVideoProcessor",
    "Watermarker",
]
