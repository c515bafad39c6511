"""Queries for neo-storage."""

from .get_file_metadata import GetFileMetadataQuery

__all__ = ["GetFileMetadataQuery"]
