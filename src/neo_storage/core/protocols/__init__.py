"""Protocols for neo-storage collaborators."""

from .object_store import ObjectStore
from .content_scanner import ContentScanner
from .image_processor import ImageProcessor
from .video_processor import VideoProcessor
from .naming_strategy import NamingStrategy
from .mime_detector import MimeDetector

__all__ = [
    "ObjectStore",
    "ContentScanner",
    "ImageProcessor",
    "VideoProcessor",
    "NamingStrategy",
    "MimeDetector",
]
