"""Value objects for neo-storage."""

from .storage_key import StorageKey
from .mime_type import (
    MimeType,
    MimeFamily,
    MIME_EXTENSIONS,
    FORMAT_MIME_TYPES,
    DEFAULT_EXTENSION,
    IMAGE_OUTPUT_FORMATS,
    normalize_format,
)
from .object_stat import ObjectStat
from .scan_result import ScanResult
from .transform_result import TransformResult
from .upload_options import (
    OptionBlock,
    WatermarkOptions,
    ResizeOptions,
    ImageOptions,
    CompressionOptions,
    WebOptimizationOptions,
    ThumbnailOptions,
    VideoResizeOptions,
    ClipOptions,
    VideoWatermarkOptions,
    VideoOptions,
    VideoThumbnailOptions,
    UrlOptions,
    DefaultUploadOptions,
    UploadOptions,
    merge_models,
    merge_upload_options,
)

__all__ = [
    "StorageKey",
    "MimeType",
    "MimeFamily",
    "MIME_EXTENSIONS",
    "FORMAT_MIME_TYPES",
    "DEFAULT_EXTENSION",
    "IMAGE_OUTPUT_FORMATS",
    "normalize_format",
    "ObjectStat",
    "ScanResult",
    "TransformResult",
    "OptionBlock",
    "WatermarkOptions",
    "ResizeOptions",
    "ImageOptions",
    "CompressionOptions",
    "WebOptimizationOptions",
    "ThumbnailOptions",
    "VideoResizeOptions",
    "ClipOptions",
    "VideoWatermarkOptions",
    "VideoOptions",
    "VideoThumbnailOptions",
    "UrlOptions",
    "DefaultUploadOptions",
    "UploadOptions",
    "merge_models",
    "merge_upload_options",
]
