"""MIME type value object.

ONLY MIME type - represents a detected MIME type with family
categorization and extension lookups used by the upload pipeline.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class MimeFamily(str, Enum):
    """Coarse category used to select a processing branch and a scanner."""
    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"
    OTHER = "other"


DOCUMENT_TYPES = frozenset({
    'application/pdf',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'application/vnd.ms-excel',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'application/vnd.ms-powerpoint',
    'application/vnd.openxmlformats-officedocument.presentationml.presentation',
    'text/plain',
    'text/rtf',
})

# MIME type -> stored extension, used when the source declares none
MIME_EXTENSIONS: Dict[str, str] = {
    'image/jpeg': 'jpg',
    'image/png': 'png',
    'image/gif': 'gif',
    'image/webp': 'webp',
    'text/plain': 'txt',
    'application/pdf': 'pdf',
    'application/msword': 'doc',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document': 'docx',
    'application/vnd.ms-excel': 'xls',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet': 'xlsx',
    'video/mp4': 'mp4',
    'video/webm': 'webm',
}

# Encoded output format -> content type for transformed artifacts
FORMAT_MIME_TYPES: Dict[str, str] = {
    'jpg': 'image/jpeg',
    'jpeg': 'image/jpeg',
    'png': 'image/png',
    'webp': 'image/webp',
    'avif': 'image/avif',
    'gif': 'image/gif',
    'mp4': 'video/mp4',
    'webm': 'video/webm',
}

DEFAULT_EXTENSION = 'bin'


@dataclass(frozen=True)
class MimeType:
    """MIME type value object.
    
    Stores the bare lower-cased type, dropping parameters such as charset.
    """
    
    value: str
    
    def __post_init__(self):
        if not isinstance(self.value, str) or '/' not in self.value:
            raise ValueError(f"Invalid MIME type: {self.value!r}")
        object.__setattr__(self, 'value', self.value.split(';')[0].strip().lower())
    
    @property
    def main_type(self) -> str:
        return self.value.split('/')[0]
    
    @property
    def family(self) -> MimeFamily:
        """Family used for branch and scanner selection."""
        if self.is_image():
            return MimeFamily.IMAGE
        if self.is_video():
            return MimeFamily.VIDEO
        if self.is_document():
            return MimeFamily.DOCUMENT
        return MimeFamily.OTHER
    
    def is_image(self) -> bool:
        return self.main_type == 'image'
    
    def is_video(self) -> bool:
        return self.main_type == 'video'
    
    def is_document(self) -> bool:
        return self.value in DOCUMENT_TYPES
    
    @staticmethod
    def for_format(output_format: str, default: str = 'application/octet-stream') -> str:
        """Content type for an encoded output format such as ``jpg`` or ``webm``."""
        return FORMAT_MIME_TYPES.get(output_format.lower().lstrip('.'), default)
    
    def __str__(self) -> str:
        return self.value


# Formats the image processor can encode
IMAGE_OUTPUT_FORMATS = frozenset({'jpg', 'png', 'webp', 'avif', 'gif', 'bmp', 'tiff'})


def normalize_format(output_format: str) -> str:
    """Lower-case extension-style format, ``jpeg`` folded into ``jpg``."""
    normalized = output_format.lower().lstrip('.')
    return 'jpg' if normalized == 'jpeg' else normalized
