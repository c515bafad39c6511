"""Video branch.

ONLY video processing - optional transcoding and frame-capture thumbnails
through the external transcoder, degrading to a verbatim upload with a
recorded warning when the transcoder is unavailable.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from ...config.settings import StorageSettings
from ...core.entities.upload_result import MAIN, THUMBNAIL, UploadResult
from ...core.exceptions.transcoder_unavailable import TranscoderUnavailable
from ...core.protocols.video_processor import VideoProcessor
from ...core.value_objects.mime_type import MimeType
from ...core.value_objects.storage_key import StorageKey
from ...core.value_objects.upload_options import merge_models
from ..services.path_builder import PathBuilder
from ..services.security_gate import SecurityGate
from ..services.storage_gateway import StorageGateway
from .base import ProcessingBranch
from .context import PipelineStage, ProcessingContext

logger = logging.getLogger(__name__)

VIDEO_SKIPPED_WARNING = "Video processing skipped: FFmpeg not available"
THUMBNAIL_SKIPPED_WARNING = "Video thumbnail creation skipped: FFmpeg not available"
THUMBNAIL_FORMAT = "jpg"


class VideoBranch(ProcessingBranch):
    """Transcode and store a video plus its optional frame thumbnail.
    
    Temporary files live in a per-call temporary directory that is removed
    on every exit path.
    """
    
    name = "video"
    
    def __init__(
        self,
        gateway: StorageGateway,
        security_gate: SecurityGate,
        path_builder: PathBuilder,
        video_processor: VideoProcessor,
        settings: StorageSettings
    ):
        self._gateway = gateway
        self._security_gate = security_gate
        self._path_builder = path_builder
        self._video_processor = video_processor
        self._settings = settings
    
    async def run(self, context: ProcessingContext) -> UploadResult:
        options = context.options
        wants_video = options.video is not None
        wants_thumbnail = options.video_thumbnail is not None
        
        if not (wants_video or wants_thumbnail):
            await self._upload_main(context, context.resolved.content, context.resolved.mime_type, context.key)
            return context.result
        
        if not self._video_processor.is_available():
            self._degrade(context, wants_video, wants_thumbnail)
            await self._upload_main(context, context.resolved.content, context.resolved.mime_type, context.key)
            return context.result
        
        with tempfile.TemporaryDirectory(prefix="neo-storage-") as temp_dir:
            await self._process(context, Path(temp_dir), wants_video, wants_thumbnail)
        
        return context.result
    
    def _degrade(self, context: ProcessingContext, wants_video: bool, wants_thumbnail: bool) -> None:
        if wants_video:
            logger.warning(f"{VIDEO_SKIPPED_WARNING}, storing original for {context.resolved.original_name}")
            context.result.warn(VIDEO_SKIPPED_WARNING)
        if wants_thumbnail:
            logger.warning(f"{THUMBNAIL_SKIPPED_WARNING} for {context.resolved.original_name}")
            context.result.warn(THUMBNAIL_SKIPPED_WARNING)
    
    async def _process(self, context: ProcessingContext, temp_dir: Path, wants_video: bool, wants_thumbnail: bool) -> None:
        resolved = context.resolved
        input_path = temp_dir / f"input.{resolved.extension or 'bin'}"
        await asyncio.to_thread(input_path.write_bytes, resolved.content)
        
        content = resolved.content
        mime_type = resolved.mime_type
        key = context.key
        processing: Optional[Dict[str, Any]] = None
        source_path = input_path
        
        if wants_video:
            video_options = merge_models(self._settings.video, context.options.video)
            output_path = temp_dir / f"output.{video_options.format}"
            try:
                processing = await self._video_processor.transcode(input_path, output_path, video_options)
            except TranscoderUnavailable as e:
                logger.warning(f"Transcoder became unavailable: {e.message}")
                self._degrade(context, wants_video=True, wants_thumbnail=wants_thumbnail)
                await self._upload_main(context, content, mime_type, key)
                return
            
            content = await asyncio.to_thread(output_path.read_bytes)
            mime_type = MimeType.for_format(video_options.format, default=resolved.mime_type)
            source_path = output_path
            
            if key.extension.lower() != video_options.format:
                context.stage = PipelineStage.PATH_RESOLVING
                key = await self._path_builder.ensure_unique(key.with_extension(video_options.format))
            
            context.stage = PipelineStage.SECONDARY_SCANNING
            self._security_gate.scan(content, resolved.original_name, mime_type, context.options.scan)
        
        await self._upload_main(context, content, mime_type, key, processing)
        
        if wants_thumbnail:
            await self._upload_thumbnail(context, source_path, temp_dir)
    
    async def _upload_main(
        self,
        context: ProcessingContext,
        content: bytes,
        mime_type: str,
        key: StorageKey,
        processing: Optional[Dict[str, Any]] = None
    ) -> None:
        context.stage = PipelineStage.UPLOADING
        record = await self._gateway.upload_file(
            key, content, mime_type, context.options.url, context.resolved.original_name, processing
        )
        context.result.add(MAIN, record)
        context.key = key
    
    async def _upload_thumbnail(self, context: ProcessingContext, source_path: Path, temp_dir: Path) -> None:
        thumbnail_options = merge_models(self._settings.video_thumbnail, context.options.video_thumbnail)
        frame_path = temp_dir / f"thumbnail.{THUMBNAIL_FORMAT}"
        
        context.stage = PipelineStage.PROCESSING
        try:
            await self._video_processor.capture_frame(source_path, frame_path, thumbnail_options)
        except TranscoderUnavailable as e:
            logger.warning(f"Transcoder became unavailable: {e.message}")
            context.result.warn(THUMBNAIL_SKIPPED_WARNING)
            return
        content = await asyncio.to_thread(frame_path.read_bytes)
        
        context.stage = PipelineStage.PATH_RESOLVING
        thumbnail_key = PathBuilder.thumbnail_path(context.key, thumbnail_options.suffix, THUMBNAIL_FORMAT, thumbnail_options.path)
        if thumbnail_options.path:
            thumbnail_key = await self._path_builder.ensure_unique(thumbnail_key)
        
        mime_type = MimeType.for_format(THUMBNAIL_FORMAT)
        context.stage = PipelineStage.SECONDARY_SCANNING
        self._security_gate.scan(content, context.resolved.original_name, mime_type, context.options.scan)
        
        context.stage = PipelineStage.UPLOADING
        record = await self._gateway.upload_file(
            thumbnail_key,
            content,
            mime_type,
            context.options.url,
            context.resolved.original_name,
            {"time": thumbnail_options.time, "width": thumbnail_options.width, "height": thumbnail_options.height},
        )
        context.result.add(THUMBNAIL, record)
