"""Upload file command.

ONLY file upload - sequences introspection, validation, scanning,
naming, path resolution and type-specific processing into one call and
owns error translation for the whole pipeline.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Any, Dict, Optional, Union

from ...config.settings import StorageSettings
from ...core.entities.upload_result import UploadResult
from ...core.exceptions.upload_failed import UploadFailed
from ...core.value_objects.upload_options import UploadOptions, merge_upload_options
from ..naming.resolver import resolve_naming_strategy
from ..processing.context import PipelineStage, ProcessingContext
from ..processing.router import TypeRouter
from ..services.content_introspector import ContentIntrospector
from ..services.path_builder import PathBuilder
from ..services.security_gate import SecurityGate
from ..validators.file_type_validator import FileTypeValidator

logger = logging.getLogger(__name__)


class UploadFileCommand:
    """Command to upload a single file.
    
    Pipeline stages:
    - Introspecting: read the source, derive name, MIME type and extension
    - Validating: extension allow-list
    - Scanning: type-appropriate security scan
    - Naming: generate the stored filename
    - PathResolving: build the final key and make it unique
    - Processing: image / video / passthrough branch, which re-scans
      transformed bytes and uploads every artifact
    
    Any failure surfaces as ``UploadFailed`` wrapping the original error.
    Artifacts uploaded before a failure are not rolled back.
    """
    
    def __init__(
        self,
        introspector: ContentIntrospector,
        validator: FileTypeValidator,
        security_gate: SecurityGate,
        path_builder: PathBuilder,
        router: TypeRouter,
        settings: StorageSettings
    ):
        """Initialize upload file command.
        
        Args:
            introspector: Resolves sources into bytes plus type information
            validator: Extension allow-list validator
            security_gate: Scanner dispatch
            path_builder: Key derivation and uniqueness resolution
            router: MIME family to processing branch
            settings: Process-wide defaults, read-only
        """
        self._introspector = introspector
        self._validator = validator
        self._security_gate = security_gate
        self._path_builder = path_builder
        self._router = router
        self._settings = settings
    
    async def execute(
        self,
        source: Any,
        destination: Optional[str] = None,
        options: Union[UploadOptions, Dict[str, Any], None] = None
    ) -> UploadResult:
        """Execute file upload operation.
        
        Args:
            source: Uploaded file, byte stream, bytes or filesystem path
            destination: Destination directory or file path; None generates
                a date-partitioned directory
            options: Call options, layered over process-wide defaults
            
        Returns:
            Mapping of artifact role to stored artifact record
            
        Raises:
            UploadFailed: If the upload fails at any stage
        """
        stage = PipelineStage.INTROSPECTING
        context: Optional[ProcessingContext] = None
        filename: Optional[str] = None
        
        logger.info(f"Upload started: destination={destination}")
        
        try:
            resolved_options = merge_upload_options(self._settings.default_options, options)
            directory, destination_name = PathBuilder.split_destination(
                destination if destination is not None else PathBuilder.generate_destination()
            )
            
            resolved = await self._introspector.resolve(source, name_hint=destination_name)
            filename = resolved.original_name
            
            stage = PipelineStage.VALIDATING
            allowed_types = (
                resolved_options.allowed_types
                if resolved_options.allowed_types is not None
                else self._settings.allowed_types
            )
            self._validator.validate(resolved.extension, resolved.mime_type, allowed_types)
            
            stage = PipelineStage.SCANNING
            self._security_gate.scan(resolved.content, resolved.original_name, resolved.mime_type, resolved_options.scan)
            
            stage = PipelineStage.NAMING
            strategy = resolve_naming_strategy(resolved_options.naming)
            stored_name = strategy.generate(resolved.original_name, resolved.content, resolved.extension)
            
            stage = PipelineStage.PATH_RESOLVING
            key = PathBuilder.build_final_path(directory, stored_name, resolved_options.preserve_structure)
            key = await self._path_builder.ensure_unique(key)
            
            stage = PipelineStage.PROCESSING
            context = ProcessingContext(resolved=resolved, key=key, options=resolved_options)
            branch = self._router.select(resolved.mime_type)
            result = await branch.run(context)
            context.stage = PipelineStage.RESULT_ASSEMBLED
            
            logger.info(
                f"Upload completed: path={result.main.path if result.main else None}, "
                f"size={resolved.size}, branch={branch.name}"
            )
            return result
        
        except Exception as e:
            failed_stage = context.stage if context is not None else stage
            # The gateway reports URL failures as UploadFailed already
            cause = e.cause if isinstance(e, UploadFailed) and e.cause is not None else e
            logger.error(f"Upload failed: destination={destination}, stage={failed_stage.value}, error={e}")
            raise UploadFailed(
                message=f"Failed to upload file: {e}",
                destination=destination,
                filename=filename,
                upload_stage=failed_stage.value,
                cause=cause,
            ) from e
