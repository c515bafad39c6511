"""Storage router.

ONLY storage endpoints - upload, delete, metadata and URL lookup over
HTTP.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..application.services.storage_service import StorageService
from ..core.exceptions.base import NeoStorageError, create_error_response, get_http_status_code
from ..core.value_objects.upload_options import UploadOptions
from .dependencies import get_storage_service, get_upload_options

logger = logging.getLogger(__name__)


def _error_response(error: NeoStorageError) -> JSONResponse:
    return JSONResponse(
        status_code=get_http_status_code(error),
        content=jsonable_encoder(create_error_response(error)),
    )


def create_storage_router(
    service: Optional[StorageService] = None,
    prefix: str = "/files",
    tags: Optional[list] = None
) -> APIRouter:
    """Create the storage router.
    
    Args:
        service: Storage service to serve, defaults to the process-wide one
        prefix: Route prefix
        tags: OpenAPI tags
        
    Returns:
        APIRouter with upload, delete, metadata and URL endpoints
    """
    router = APIRouter(prefix=prefix, tags=tags or ["Files"])
    
    async def resolve_service() -> StorageService:
        return service if service is not None else await get_storage_service()
    
    @router.post(
        "",
        status_code=status.HTTP_201_CREATED,
        summary="Upload file",
        description="Upload a file with optional processing, returning every stored artifact"
    )
    async def upload_file(
        file: UploadFile = File(...),
        destination: Optional[str] = Form(default=None),
        options: Optional[UploadOptions] = Depends(get_upload_options),
        storage: StorageService = Depends(resolve_service)
    ) -> Any:
        try:
            result = await storage.upload(file, destination, options)
        except NeoStorageError as e:
            return _error_response(e)
        finally:
            await file.close()
        return result.to_dict()
    
    @router.delete("/{path:path}", summary="Delete file")
    async def delete_file(
        path: str,
        storage: StorageService = Depends(resolve_service)
    ) -> Dict[str, Any]:
        deleted = await storage.delete(path)
        return {"path": f"/{path.lstrip('/')}", "deleted": deleted}
    
    @router.get("/metadata/{path:path}", summary="Get file metadata")
    async def get_file_metadata(
        path: str,
        storage: StorageService = Depends(resolve_service)
    ) -> Any:
        try:
            return await storage.get_metadata(path)
        except NeoStorageError as e:
            return _error_response(e)
    
    @router.get("/url/{path:path}", summary="Get file URL")
    async def get_file_url(
        path: str,
        expiration: Optional[int] = Query(default=None, gt=0),
        signed: Optional[bool] = Query(default=None),
        storage: StorageService = Depends(resolve_service)
    ) -> Any:
        try:
            url = await storage.get_url(path, expiration, signed)
        except NeoStorageError as e:
            return _error_response(e)
        return {"path": f"/{path.lstrip('/')}", "url": url}
    
    return router
