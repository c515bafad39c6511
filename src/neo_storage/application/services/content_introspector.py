"""Content introspector service.

ONLY source resolution - reads an upload source into bytes and derives
its display name, MIME type and extension.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import inspect
import logging
import mimetypes
import os
from pathlib import Path, PurePosixPath
from typing import Any, Optional

from starlette.datastructures import UploadFile

from ...core.entities.resolved_file import ResolvedFile
from ...core.exceptions.invalid_source import InvalidSource
from ...core.protocols.mime_detector import MimeDetector
from ...core.value_objects.mime_type import DEFAULT_EXTENSION, MIME_EXTENSIONS

logger = logging.getLogger(__name__)

# Display name for sources that carry none
STREAM_NAME = "uploaded-file"

# Sniffer results that say nothing about the content
GENERIC_MIME_TYPES = frozenset({
    "application/x-empty",
    "inode/x-empty",
    "application/octet-stream",
})

FALLBACK_MIME_TYPE = "application/octet-stream"


def _name_extension(name: str) -> str:
    return PurePosixPath(name).suffix.lstrip('.').lower()


class ContentIntrospector:
    """Resolve upload sources into ``ResolvedFile``.
    
    Supported sources:
    - framework uploaded files (``UploadFile``): declared content type and name
    - ``bytes`` / ``bytearray`` / ``memoryview`` and binary file-like objects
    - filesystem paths (``str`` or ``os.PathLike``)
    
    MIME types come from the source's declared type when available,
    otherwise from content sniffing. A name-based guess is used only when
    sniffing yields an empty or generic type.
    """
    
    def __init__(self, mime_detector: MimeDetector):
        self._mime_detector = mime_detector
    
    async def resolve(self, source: Any, name_hint: Optional[str] = None) -> ResolvedFile:
        """Resolve a source.
        
        Args:
            source: Upload source
            name_hint: Display name for sources that carry none
            
        Returns:
            Resolved file
            
        Raises:
            InvalidSource: If the source shape is unsupported or unreadable
        """
        if isinstance(source, UploadFile):
            return await self._from_upload(source, name_hint)
        if isinstance(source, (bytes, bytearray, memoryview)):
            return await self._from_bytes(bytes(source), name_hint or STREAM_NAME, declared_extension=None)
        if isinstance(source, (str, os.PathLike)):
            return await self._from_path(Path(source))
        if callable(getattr(source, "read", None)):
            return await self._from_stream(source, name_hint)
        
        raise InvalidSource(
            message="Invalid source: expected an uploaded file, a byte stream or a file path",
            source_type=type(source).__name__,
        )
    
    async def _from_upload(self, upload: UploadFile, name_hint: Optional[str]) -> ResolvedFile:
        content = await upload.read()
        name = PurePosixPath(upload.filename).name if upload.filename else (name_hint or STREAM_NAME)
        
        declared_mime = upload.content_type
        if not declared_mime or declared_mime.lower() in GENERIC_MIME_TYPES:
            declared_mime = None
        
        mime_type = declared_mime or await self._sniff(content, name)
        extension = self._resolve_extension(_name_extension(name) or None, mime_type, name)
        return ResolvedFile(content=content, original_name=name, mime_type=mime_type, extension=extension)
    
    async def _from_path(self, path: Path) -> ResolvedFile:
        if not path.is_file():
            raise InvalidSource(
                message=f"Invalid source: file does not exist: {path}",
                source_type="path",
                source_path=str(path),
            )
        
        try:
            content = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise InvalidSource(
                message=f"Invalid source: cannot read {path}: {e}",
                source_type="path",
                source_path=str(path),
            ) from e
        
        return await self._from_bytes(content, path.name, declared_extension=_name_extension(path.name) or None)
    
    async def _from_stream(self, stream: Any, name_hint: Optional[str]) -> ResolvedFile:
        data = stream.read()
        if inspect.isawaitable(data):
            data = await data
        if isinstance(data, str) or not isinstance(data, (bytes, bytearray, memoryview)):
            raise InvalidSource(
                message="Invalid source: stream must be opened in binary mode",
                source_type=type(stream).__name__,
            )
        
        stream_name = getattr(stream, "name", None)
        name = name_hint or (os.path.basename(stream_name) if isinstance(stream_name, str) else None) or STREAM_NAME
        return await self._from_bytes(bytes(data), name, declared_extension=None)
    
    async def _from_bytes(self, content: bytes, name: str, declared_extension: Optional[str]) -> ResolvedFile:
        mime_type = await self._sniff(content, name)
        extension = self._resolve_extension(declared_extension, mime_type, name)
        return ResolvedFile(content=content, original_name=name, mime_type=mime_type, extension=extension)
    
    async def _sniff(self, content: bytes, name: str) -> str:
        detected = await asyncio.to_thread(self._mime_detector.detect, content)
        if detected and detected.lower() not in GENERIC_MIME_TYPES:
            return detected.lower()
        
        guessed, _ = mimetypes.guess_type(name)
        return guessed or detected or FALLBACK_MIME_TYPE
    
    @staticmethod
    def _resolve_extension(declared: Optional[str], mime_type: str, name: str) -> str:
        """Declared extension, then the MIME table, then the name's own extension."""
        if declared:
            return declared.lower()
        
        from_mime = MIME_EXTENSIONS.get(mime_type.split(';')[0].strip().lower())
        if from_mime:
            return from_mime
        
        return _name_extension(name) or DEFAULT_EXTENSION
    
