"""Storage API dependencies.

ONLY storage dependencies - FastAPI dependency providers for the storage
service and parsed upload options.

Following maximum separation architecture - one file = one purpose.
"""

import json
from typing import Any, Dict, Optional

from fastapi import Form, HTTPException, status
from pydantic import ValidationError as PydanticValidationError

from ..application.services.storage_service import StorageService
from ..core.value_objects.upload_options import UploadOptions
from ..factory import create_storage_service

_storage_service: Optional[StorageService] = None


async def get_storage_service() -> StorageService:
    """Get the process-wide storage service, created on first use.
    
    Routers built with ``create_storage_router(service)`` override this
    dependency with their own instance.
    """
    global _storage_service
    if _storage_service is None:
        _storage_service = create_storage_service()
    return _storage_service


async def get_upload_options(options: Optional[str] = Form(default=None)) -> Optional[UploadOptions]:
    """Parse the ``options`` form field (JSON object) into ``UploadOptions``."""
    if not options:
        return None
    
    try:
        raw: Dict[str, Any] = json.loads(options)
        if not isinstance(raw, dict):
            raise ValueError("options must be a JSON object")
        return UploadOptions.model_validate(raw)
    except (ValueError, PydanticValidationError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid upload options: {e}"
        )
