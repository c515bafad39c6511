"""Entities for neo-storage."""

from .resolved_file import ResolvedFile
from .upload_result import ArtifactRecord, UploadResult, MAIN, THUMBNAIL, WARNINGS

__all__ = ["ResolvedFile", "ArtifactRecord", "UploadResult", "MAIN", "THUMBNAIL", "WARNINGS"]
