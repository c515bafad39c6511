"""S3 object store.

ONLY S3-compatible storage - aioboto3-backed object store for MinIO and
AWS S3 with path-style addressing support.

Following maximum separation architecture - one file = one purpose.
"""

import logging
import uuid
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

import aioboto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ...config.settings import StorageSettings
from ...core.exceptions.file_not_found import FileNotFound
from ...core.value_objects.object_stat import ObjectStat

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})
NONCE_PARAM = "x-neo-nonce"


def _error_code(error: ClientError) -> Optional[str]:
    return error.response.get("Error", {}).get("Code")


def _add_signature_nonce(request, **kwargs) -> None:
    """Append a random query parameter before the request is signed.
    
    SigV4 timestamps have one-second resolution; the signed nonce keeps two
    URLs for the same key distinct within that second.
    """
    separator = "&" if urlsplit(request.url).query else "?"
    request.url = f"{request.url}{separator}{NONCE_PARAM}={uuid.uuid4().hex}"


class S3ObjectStore:
    """Object store backed by an S3-compatible service.
    
    A client is opened per operation from a shared session, so one
    instance can serve concurrent uploads.
    """
    
    def __init__(self, settings: StorageSettings, session: Optional[aioboto3.Session] = None):
        """Initialize S3 object store.
        
        Args:
            settings: Connection settings (endpoint, credentials, bucket, region)
            session: Existing aioboto3 session to reuse
        """
        self._bucket = settings.bucket
        self._session = session or aioboto3.Session()
        self._client_kwargs: Dict[str, Any] = {
            "endpoint_url": settings.endpoint,
            "aws_access_key_id": settings.access_key.get_secret_value(),
            "aws_secret_access_key": settings.secret_key.get_secret_value(),
            "region_name": settings.region,
            "config": Config(
                signature_version="s3v4",
                s3={"addressing_style": "path" if settings.use_path_style_endpoint else "auto"},
            ),
        }
        logger.info(f"S3 object store initialized: endpoint={settings.endpoint}, bucket={self._bucket}")
    
    @property
    def bucket(self) -> str:
        return self._bucket
    
    def _get_client(self):
        return self._session.client("s3", **self._client_kwargs)
    
    async def write(self, key: str, content: bytes, content_type: str) -> None:
        try:
            async with self._get_client() as s3_client:
                await s3_client.put_object(
                    Bucket=self._bucket,
                    Key=key,
                    Body=content,
                    ContentType=content_type,
                )
        except ClientError as e:
            logger.exception(f"Error writing s3://{self._bucket}/{key}: {_error_code(e)}")
            raise
    
    async def read(self, key: str) -> bytes:
        try:
            async with self._get_client() as s3_client:
                response = await s3_client.get_object(Bucket=self._bucket, Key=key)
                async with response["Body"] as stream:
                    return await stream.read()
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                raise FileNotFound(message=f"File not found: /{key}", path=f"/{key}", bucket=self._bucket) from e
            logger.exception(f"Error reading s3://{self._bucket}/{key}")
            raise
    
    async def exists(self, key: str, bucket: Optional[str] = None) -> bool:
        try:
            async with self._get_client() as s3_client:
                await s3_client.head_object(Bucket=bucket or self._bucket, Key=key)
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                return False
            raise
        return True
    
    async def stat(self, key: str) -> ObjectStat:
        try:
            async with self._get_client() as s3_client:
                response = await s3_client.head_object(Bucket=self._bucket, Key=key)
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                raise FileNotFound(message=f"File not found: /{key}", path=f"/{key}", bucket=self._bucket) from e
            raise
        
        return ObjectStat(
            size=response.get("ContentLength", 0),
            content_type=response.get("ContentType"),
            last_modified=response.get("LastModified"),
        )
    
    async def size(self, key: str) -> int:
        return (await self.stat(key)).size
    
    async def delete(self, key: str) -> bool:
        async with self._get_client() as s3_client:
            await s3_client.delete_object(Bucket=self._bucket, Key=key)
        return True
    
    async def presigned_url(self, key: str, ttl: int, bucket: Optional[str] = None) -> str:
        async with self._get_client() as s3_client:
            s3_client.meta.events.register("before-sign.s3.GetObject", _add_signature_nonce)
            return await s3_client.generate_presigned_url(
                "get_object",
                Params={"Bucket": bucket or self._bucket, "Key": key},
                ExpiresIn=ttl,
            )
