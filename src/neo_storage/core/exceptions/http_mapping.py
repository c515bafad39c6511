"""HTTP status code mapping for exceptions.

This module maps the neo-storage exception hierarchy onto HTTP status codes
for the FastAPI surface. Lookups walk the exception MRO so subclasses
inherit the status of their closest mapped ancestor.
"""

from typing import Dict, Type

from .base import (
    NeoStorageError,
    ResourceNotFoundError,
    SecurityError,
    ServiceUnavailableError,
    StorageError,
    ValidationError,
)
from .file_not_found import FileNotFound
from .invalid_source import InvalidSource
from .path_exhausted import PathExhausted
from .processing_failed import ProcessingFailed
from .security_threat import SecurityThreat
from .transcoder_unavailable import TranscoderUnavailable
from .unsupported_file_type import UnsupportedFileType
from .upload_failed import UploadFailed


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    ValidationError: 400,
    InvalidSource: 400,
    
    # 403 Forbidden
    SecurityError: 403,
    SecurityThreat: 403,
    
    # 404 Not Found
    ResourceNotFoundError: 404,
    FileNotFound: 404,
    
    # 409 Conflict
    PathExhausted: 409,
    
    # 415 Unsupported Media Type
    UnsupportedFileType: 415,
    
    # 422 Unprocessable Entity
    ProcessingFailed: 422,
    
    # 500 Internal Server Error
    StorageError: 500,
    UploadFailed: 500,
    
    # 503 Service Unavailable
    ServiceUnavailableError: 503,
    TranscoderUnavailable: 503,
    
    # Default for NeoStorageError
    NeoStorageError: 500,
}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.
    
    UploadFailed reports the status of the error it wraps, so a security
    rejection inside the pipeline still surfaces as 403.
    
    Args:
        exception: The exception instance
        
    Returns:
        HTTP status code
    """
    if isinstance(exception, UploadFailed) and isinstance(exception.cause, NeoStorageError):
        return get_http_status_code(exception.cause)
    
    for exception_type in type(exception).__mro__:
        if exception_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exception_type]
    return 500
