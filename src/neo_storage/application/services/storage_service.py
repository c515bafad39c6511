"""Storage service.

ONLY service facade - the public entry point combining the upload
pipeline with the secondary file operations.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, Optional, Union

from ...core.entities.upload_result import UploadResult
from ...core.value_objects.upload_options import UploadOptions
from ..commands.delete_file import DeleteFileCommand
from ..commands.upload_file import UploadFileCommand
from ..queries.get_file_metadata import GetFileMetadataQuery
from .existence_checker import ExistenceChecker
from .storage_gateway import StorageGateway


class StorageService:
    """File storage operations over one object store.
    
    Holds no per-call state; one instance serves concurrent uploads.
    """
    
    def __init__(
        self,
        upload_command: UploadFileCommand,
        delete_command: DeleteFileCommand,
        metadata_query: GetFileMetadataQuery,
        gateway: StorageGateway,
        existence_checker: ExistenceChecker
    ):
        self._upload_command = upload_command
        self._delete_command = delete_command
        self._metadata_query = metadata_query
        self._gateway = gateway
        self._existence_checker = existence_checker
    
    async def upload(
        self,
        source: Any,
        destination: Optional[str] = None,
        options: Union[UploadOptions, Dict[str, Any], None] = None
    ) -> UploadResult:
        """Upload a file and its derived artifacts.
        
        Args:
            source: ``UploadFile``, bytes, binary stream or filesystem path
            destination: Directory or file path; None generates
                ``uploads/YYYY/MM/DD/``
            options: Per-call options, dict or ``UploadOptions``
            
        Returns:
            Mapping of artifact role (``main``, ``thumbnail``, ``warnings``)
            to its record
            
        Raises:
            UploadFailed: Wrapping whatever failed inside the pipeline
        """
        return await self._upload_command.execute(source, destination, options)
    
    async def delete(self, path: str) -> bool:
        """Delete a file; storage errors return False."""
        return await self._delete_command.execute(path)
    
    async def file_exists(self, path: str, bucket: Optional[str] = None) -> bool:
        return await self._existence_checker.exists(path, bucket)
    
    async def get_metadata(self, path: str) -> Dict[str, Any]:
        """Stat and type-specific metadata; raises ``FileNotFound`` for absent paths."""
        return await self._metadata_query.execute(path)
    
    async def get_url(
        self,
        path: str,
        expiration: Optional[int] = None,
        signed: Optional[bool] = None
    ) -> str:
        return await self._gateway.get_url(path, expiration, signed)
    
    def get_public_url(self, path: str) -> str:
        """Public URL without an existence check."""
        return self._gateway.get_public_url(path)
    
    async def get_url_public(
        self,
        path: str,
        check_exists: bool = True,
        bucket: Optional[str] = None
    ) -> str:
        """Public URL; raises ``FileNotFound`` when ``check_exists`` and absent."""
        return await self._gateway.get_url_public(path, check_exists, bucket)
