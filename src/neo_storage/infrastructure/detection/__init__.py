"""Content type detection."""

from .magic_mime_detector import MagicMimeDetector

__all__ = ["MagicMimeDetector"]
