"""Neo-Storage - file ingestion and object storage library for NeoMultiTenant services.

Accepts a file from an uploaded form field, a byte stream or a local path,
validates and scans it, derives its storage key, applies image or video
processing and stores every artifact in an S3-compatible object store.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    StorageSettings,
    get_settings,
)

from .core.exceptions import (
    # Base Exception
    NeoStorageError,
    
    # Pipeline Exceptions
    InvalidSource,
    UnsupportedFileType,
    SecurityThreat,
    PathExhausted,
    TranscoderUnavailable,
    FileNotFound,
    NotFound,
    ProcessingFailed,
    UploadFailed,
    
    # Utility Functions
    get_http_status_code,
    create_error_response,
)

from .core.entities import (
    ArtifactRecord,
    UploadResult,
)

from .core.value_objects import (
    StorageKey,
    MimeType,
    UploadOptions,
)

from .application.services import StorageService
from .factory import create_storage_service

__all__ = [
    "__version__",
    
    # Configuration
    "StorageSettings",
    "get_settings",
    "setup_logging",
    
    # Exceptions
    "NeoStorageError",
    "InvalidSource",
    "UnsupportedFileType",
    "SecurityThreat",
    "PathExhausted",
    "TranscoderUnavailable",
    "FileNotFound",
    "NotFound",
    "ProcessingFailed",
    "UploadFailed",
    "get_http_status_code",
    "create_error_response",
    
    # Results and options
    "ArtifactRecord",
    "UploadResult",
    "StorageKey",
    "MimeType",
    "UploadOptions",
    
    # Service
    "StorageService",
    "create_storage_service",
]
