"""Exceptions for neo-storage.

Base hierarchy plus one module per concrete upload pipeline failure.
"""

from .base import (
    NeoStorageError,
    ValidationError,
    SecurityError,
    ResourceNotFoundError,
    StorageError,
    ServiceUnavailableError,
    create_error_response,
    get_http_status_code,
)
from .invalid_source import InvalidSource
from .unsupported_file_type import UnsupportedFileType
from .security_threat import SecurityThreat
from .path_exhausted import PathExhausted
from .transcoder_unavailable import TranscoderUnavailable
from .file_not_found import FileNotFound, NotFound
from .processing_failed import ProcessingFailed
from .upload_failed import UploadFailed

__all__ = [
    # Base
    "NeoStorageError",
    "ValidationError",
    "SecurityError",
    "ResourceNotFoundError",
    "StorageError",
    "ServiceUnavailableError",
    "create_error_response",
    "get_http_status_code",
    
    # Pipeline
    "InvalidSource",
    "UnsupportedFileType",
    "SecurityThreat",
    "PathExhausted",
    "TranscoderUnavailable",
    "FileNotFound",
    "NotFound",
    "ProcessingFailed",
    "UploadFailed",
]
