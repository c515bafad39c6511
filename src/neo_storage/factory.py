"""Storage service factory.

ONLY service wiring - builds a ``StorageService`` from settings, using
the S3, Pillow, ffmpeg and python-magic adapters unless collaborators
are supplied.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
from typing import Optional

from .application.commands.delete_file import DeleteFileCommand
from .application.commands.upload_file import UploadFileCommand
from .application.processing.image_branch import ImageBranch
from .application.processing.passthrough_branch import PassthroughBranch
from .application.processing.router import TypeRouter
from .application.processing.video_branch import VideoBranch
from .application.queries.get_file_metadata import GetFileMetadataQuery
from .application.services.content_introspector import ContentIntrospector
from .application.services.existence_checker import ExistenceChecker
from .application.services.path_builder import PathBuilder
from .application.services.security_gate import SecurityGate
from .application.services.storage_gateway import StorageGateway
from .application.services.storage_service import StorageService
from .application.validators.file_type_validator import FileTypeValidator
from .config.settings import StorageSettings, get_settings
from .core.protocols.image_processor import ImageProcessor
from .core.protocols.mime_detector import MimeDetector
from .core.protocols.object_store import ObjectStore
from .core.protocols.video_processor import VideoProcessor
from .utils.retry import RetryPolicy, SleepFunc

logger = logging.getLogger(__name__)


def create_storage_service(
    settings: Optional[StorageSettings] = None,
    object_store: Optional[ObjectStore] = None,
    mime_detector: Optional[MimeDetector] = None,
    image_processor: Optional[ImageProcessor] = None,
    video_processor: Optional[VideoProcessor] = None,
    sleep: SleepFunc = asyncio.sleep
) -> StorageService:
    """Create a fully wired storage service.
    
    Settings are read once here and passed down; nothing below reads
    configuration on its own.
    
    Args:
        settings: Storage settings, defaults to ``get_settings()``
        object_store: Object store, defaults to ``S3ObjectStore``
        mime_detector: MIME sniffer, defaults to ``MagicMimeDetector``
        image_processor: Image transforms, defaults to ``PillowImageProcessor``
        video_processor: Video transcoder, defaults to ``FfmpegVideoProcessor``
        sleep: Delay function used between existence-check retries
        
    Returns:
        StorageService instance
    """
    settings = settings or get_settings()
    
    if object_store is None:
        from .infrastructure.storage.s3_object_store import S3ObjectStore
        object_store = S3ObjectStore(settings)
    if mime_detector is None:
        from .infrastructure.detection.magic_mime_detector import MagicMimeDetector
        mime_detector = MagicMimeDetector()
    if image_processor is None:
        from .infrastructure.processors.image_processor import PillowImageProcessor
        image_processor = PillowImageProcessor()
    if video_processor is None:
        from .infrastructure.processors.video_processor import FfmpegVideoProcessor
        video_processor = FfmpegVideoProcessor(settings.transcoder)
    
    from .infrastructure.scanners.document_scanner import DocumentScanner
    from .infrastructure.scanners.image_scanner import ImageScanner
    from .infrastructure.scanners.pattern_scanner import PatternScanner
    
    retry_policy = RetryPolicy(
        max_attempts=settings.existence_check.max_attempts,
        initial_delay_ms=settings.existence_check.initial_delay_ms,
        backoff_multiplier=settings.existence_check.backoff_multiplier,
    )
    existence_checker = ExistenceChecker(object_store, retry_policy, sleep=sleep)
    path_builder = PathBuilder(existence_checker, settings.max_unique_attempts)
    security_gate = SecurityGate(
        image_scanner=ImageScanner(),
        document_scanner=DocumentScanner(max_file_size=settings.security.max_file_size),
        generic_scanner=PatternScanner(),
        settings=settings.security,
    )
    gateway = StorageGateway(object_store, existence_checker, settings)
    
    router = TypeRouter(
        image_branch=ImageBranch(gateway, security_gate, path_builder, image_processor, settings),
        passthrough_branch=PassthroughBranch(gateway),
        video_branch=VideoBranch(gateway, security_gate, path_builder, video_processor, settings),
    )
    upload_command = UploadFileCommand(
        introspector=ContentIntrospector(mime_detector),
        validator=FileTypeValidator(),
        security_gate=security_gate,
        path_builder=path_builder,
        router=router,
        settings=settings,
    )
    
    logger.debug(f"Storage service created for bucket {object_store.bucket}")
    
    return StorageService(
        upload_command=upload_command,
        delete_command=DeleteFileCommand(object_store),
        metadata_query=GetFileMetadataQuery(
            object_store,
            existence_checker,
            image_processor,
            video_processor,
            probe_max_size=settings.metadata_probe_max_size,
        ),
        gateway=gateway,
        existence_checker=existence_checker,
    )
