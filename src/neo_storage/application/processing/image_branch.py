"""Image branch.

ONLY image processing - selects one image operation per upload, rewrites
the key for format conversions, re-scans transformed bytes and derives an
optional thumbnail.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional

from ...config.settings import StorageSettings
from ...core.entities.upload_result import MAIN, THUMBNAIL, UploadResult
from ...core.protocols.image_processor import ImageProcessor
from ...core.value_objects.mime_type import IMAGE_OUTPUT_FORMATS, MimeType, normalize_format
from ...core.value_objects.storage_key import StorageKey
from ...core.value_objects.transform_result import TransformResult
from ...core.value_objects.upload_options import UploadOptions, merge_models
from ..services.path_builder import PathBuilder
from ..services.security_gate import SecurityGate
from ..services.storage_gateway import StorageGateway
from .base import ProcessingBranch
from .context import PipelineStage, ProcessingContext

logger = logging.getLogger(__name__)

FALLBACK_THUMBNAIL_FORMAT = "jpg"
THUMBNAIL_QUALITY_FLOOR = 75


class ImageOperation(str, Enum):
    """Image operations in precedence order."""
    WEB_OPTIMIZE = "web_optimize"
    COMPRESS = "compress"
    PROCESS = "process"
    PASSTHROUGH = "passthrough"


def select_image_operation(options: UploadOptions) -> ImageOperation:
    """Web optimization beats compression, which beats general processing."""
    if options.optimize_for_web:
        return ImageOperation.WEB_OPTIMIZE
    if options.compress:
        return ImageOperation.COMPRESS
    if options.optimize or options.image is not None or options.watermark is not None:
        return ImageOperation.PROCESS
    return ImageOperation.PASSTHROUGH


class ImageBranch(ProcessingBranch):
    """Process and store an image plus its optional thumbnail."""
    
    name = "image"
    
    def __init__(
        self,
        gateway: StorageGateway,
        security_gate: SecurityGate,
        path_builder: PathBuilder,
        image_processor: ImageProcessor,
        settings: StorageSettings
    ):
        self._gateway = gateway
        self._security_gate = security_gate
        self._path_builder = path_builder
        self._image_processor = image_processor
        self._settings = settings
    
    def _transform(self, operation: ImageOperation, content: bytes, options: UploadOptions) -> Optional[TransformResult]:
        """Run the selected operation with settings merged under call options."""
        forced = {"watermark": options.watermark} if options.watermark is not None else {}
        
        if operation is ImageOperation.WEB_OPTIMIZE:
            web_options = merge_models(self._settings.web_optimization, options.web).model_copy(update=forced)
            return self._image_processor.optimize_for_web(content, web_options)
        
        if operation is ImageOperation.COMPRESS:
            compression_options = merge_models(self._settings.compression, options.compression).model_copy(update=forced)
            return self._image_processor.compress(content, compression_options)
        
        if operation is ImageOperation.PROCESS:
            if options.optimize:
                forced.update(optimize=True, smart_compression=True)
            image_options = merge_models(self._settings.image, options.image).model_copy(update=forced)
            return self._image_processor.process(content, image_options)
        
        return None
    
    async def run(self, context: ProcessingContext) -> UploadResult:
        resolved = context.resolved
        options = context.options
        operation = select_image_operation(options)
        logger.debug(f"Image operation for {resolved.original_name}: {operation.value}")
        
        content = resolved.content
        mime_type = resolved.mime_type
        key = context.key
        processing = None
        stored_format = normalize_format(key.extension) if key.extension else None
        output_format = stored_format
        
        transformed = await asyncio.to_thread(self._transform, operation, content, options)
        if transformed is not None:
            content = transformed.content
            processing = transformed.metadata
            output_format = transformed.format
            mime_type = MimeType.for_format(transformed.format, default=resolved.mime_type)
            
            if output_format != stored_format:
                context.stage = PipelineStage.PATH_RESOLVING
                key = await self._path_builder.ensure_unique(key.with_extension(output_format))
                logger.info(f"Image converted to {output_format}, storing as {key.external}")
            
            context.stage = PipelineStage.SECONDARY_SCANNING
            self._security_gate.scan(content, resolved.original_name, mime_type, options.scan)
        
        context.stage = PipelineStage.UPLOADING
        record = await self._gateway.upload_file(key, content, mime_type, options.url, resolved.original_name, processing)
        context.result.add(MAIN, record)
        context.key = key
        
        if options.thumbnail is not None:
            await self._upload_thumbnail(context, key, content, output_format)
        
        return context.result
    
    async def _upload_thumbnail(
        self,
        context: ProcessingContext,
        main_key: StorageKey,
        content: bytes,
        main_format: Optional[str]
    ) -> None:
        """Cut the thumbnail from the main artifact's bytes; no watermark is re-applied."""
        options = context.options
        thumbnail_options = merge_models(self._settings.thumbnail, options.thumbnail)
        if options.compress or options.optimize:
            thumbnail_options = thumbnail_options.model_copy(update={
                "quality": max(thumbnail_options.quality, THUMBNAIL_QUALITY_FLOOR),
                "optimize": True,
            })
        
        default_format = main_format if main_format in IMAGE_OUTPUT_FORMATS else FALLBACK_THUMBNAIL_FORMAT
        
        context.stage = PipelineStage.PROCESSING
        thumbnail = await asyncio.to_thread(
            self._image_processor.create_thumbnail, content, thumbnail_options, default_format
        )
        
        context.stage = PipelineStage.PATH_RESOLVING
        thumbnail_key = PathBuilder.thumbnail_path(main_key, thumbnail_options.suffix, thumbnail.format, thumbnail_options.path)
        if thumbnail_options.path:
            # A custom directory is not covered by the main key's uniqueness
            thumbnail_key = await self._path_builder.ensure_unique(thumbnail_key)
        
        mime_type = MimeType.for_format(thumbnail.format)
        context.stage = PipelineStage.SECONDARY_SCANNING
        self._security_gate.scan(thumbnail.content, context.resolved.original_name, mime_type, options.scan)
        
        context.stage = PipelineStage.UPLOADING
        record = await self._gateway.upload_file(
            thumbnail_key,
            thumbnail.content,
            mime_type,
            options.url,
            context.resolved.original_name,
            thumbnail.metadata,
        )
        context.result.add(THUMBNAIL, record)
