"""Storage gateway service.

ONLY artifact storage - writes bytes, builds the externally visible URL
(signed or public) and assembles the per-artifact result record.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from ...config.settings import StorageSettings
from ...core.entities.upload_result import ArtifactRecord
from ...core.exceptions.file_not_found import FileNotFound
from ...core.exceptions.upload_failed import UploadFailed
from ...core.protocols.object_store import ObjectStore
from ...core.value_objects.storage_key import StorageKey
from ...core.value_objects.upload_options import UrlOptions
from .existence_checker import ExistenceChecker

logger = logging.getLogger(__name__)


class StorageGateway:
    """Object-store writes and URL generation.
    
    Endpoint, bucket and URL defaults are resolved from settings once, at
    construction.
    """
    
    def __init__(
        self,
        object_store: ObjectStore,
        existence_checker: ExistenceChecker,
        settings: StorageSettings
    ):
        self._object_store = object_store
        self._existence_checker = existence_checker
        self._endpoint = settings.url_endpoint
        self._bucket = object_store.bucket or settings.bucket
        self._url_settings = settings.url
    
    async def upload_file(
        self,
        key: StorageKey,
        content: bytes,
        mime_type: str,
        url_options: Optional[UrlOptions],
        original_name: str,
        processing: Optional[Dict[str, Any]] = None
    ) -> ArtifactRecord:
        """Write one artifact and build its result record."""
        await self._object_store.write(key.value, content, mime_type)
        logger.debug(f"Stored {key.value} ({len(content)} bytes, {mime_type})")
        
        url_options = url_options or UrlOptions()
        url = await self.get_url(key.value, url_options.expiration, url_options.signed)
        
        return ArtifactRecord(
            path=key.external,
            url=url,
            size=len(content),
            mime_type=mime_type,
            original_name=original_name,
            file_name=key.name,
            processing=processing,
        )
    
    def resolve_expiration(self, expiration: Optional[int]) -> int:
        """Requested expiration, or the default, capped at the configured maximum."""
        ttl = expiration or self._url_settings.default_expiration
        if ttl > self._url_settings.max_expiration:
            logger.warning(f"URL expiration {ttl}s exceeds maximum, using {self._url_settings.max_expiration}s")
            ttl = self._url_settings.max_expiration
        return ttl
    
    async def get_url(
        self,
        path: str,
        expiration: Optional[int] = None,
        signed: Optional[bool] = None
    ) -> str:
        """Signed URL when requested (or signed by default), else a verified public URL.
        
        Raises:
            FileNotFound: If an unsigned URL is requested for an absent object
            UploadFailed: If URL generation fails for any other reason
        """
        if signed is None:
            signed = self._url_settings.signed_by_default
        
        key = path.lstrip('/')
        try:
            if not signed:
                return await self.get_url_public(key, check_exists=True)
            return await self._object_store.presigned_url(key, self.resolve_expiration(expiration))
        except FileNotFound:
            raise
        except Exception as e:
            logger.error(f"Failed to generate URL for {key}: {e}")
            raise UploadFailed(
                message=f"Failed to generate URL: {e}",
                destination=path,
                upload_stage="url",
                cause=e,
            ) from e
    
    def get_public_url(self, path: str, bucket: Optional[str] = None) -> str:
        """``{endpoint}/{bucket}/{key}`` without an existence check."""
        key = quote(path.lstrip('/'), safe="/")
        return f"{self._endpoint}/{bucket or self._bucket}/{key}"
    
    async def get_url_public(
        self,
        path: str,
        check_exists: bool = True,
        bucket: Optional[str] = None
    ) -> str:
        """Public URL, optionally verified against the store.
        
        Raises:
            FileNotFound: If ``check_exists`` is set and the object is absent
        """
        key = path.lstrip('/')
        target_bucket = bucket or self._bucket
        
        if check_exists and not await self._existence_checker.exists(key, bucket):
            raise FileNotFound(
                message=f"File not found: /{key}",
                path=f"/{key}",
                bucket=target_bucket,
            )
        
        return self.get_public_url(key, target_bucket)
