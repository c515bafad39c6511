"""
Storage configuration for neo-storage.

Process-wide defaults for the upload pipeline, loaded from environment
variables (``MINIO_`` prefix, ``__`` for nested blocks) and ``.env``.
Every block is overridable per call through ``UploadOptions``.
"""
from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.value_objects.upload_options import (
    CompressionOptions,
    DefaultUploadOptions,
    ImageOptions,
    ThumbnailOptions,
    VideoOptions,
    VideoThumbnailOptions,
    WebOptimizationOptions,
)


DEFAULT_ALLOWED_TYPES: Dict[str, List[str]] = {
    "images": ["jpg", "jpeg", "png", "gif", "webp", "bmp", "svg"],
    "documents": ["pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "txt", "rtf"],
    "videos": ["mp4", "avi", "mov", "wmv", "flv", "webm", "mkv", "3gp"],
    "archives": ["zip", "rar", "7z", "tar", "gz"],
    "audio": ["mp3", "wav", "flac", "aac", "ogg"],
}


class TranscoderSettings(BaseModel):
    """External ffmpeg/ffprobe binaries."""
    ffmpeg_binary: str = "ffmpeg"
    ffprobe_binary: str = "ffprobe"
    timeout: int = Field(default=3600, gt=0)
    threads: int = Field(default=12, ge=0)


class SecuritySettings(BaseModel):
    """Scanner selection and limits."""
    scan_images: bool = True
    scan_documents: bool = True
    max_file_size: int = Field(default=10 * 1024 * 1024, gt=0)


class UrlSettings(BaseModel):
    """URL generation defaults, expirations in seconds."""
    signed_by_default: bool = False
    default_expiration: int = Field(default=3600, gt=0)
    max_expiration: int = Field(default=604800, gt=0)


class ExistenceCheckSettings(BaseModel):
    """Retry bounds for existence probes against eventually consistent stores."""
    max_attempts: int = Field(default=3, ge=1)
    initial_delay_ms: int = Field(default=100, ge=0)
    backoff_multiplier: float = Field(default=2.0, ge=1)


class StorageSettings(BaseSettings):
    """Object store connection plus upload pipeline defaults."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MINIO_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Connection
    endpoint: str = "http://localhost:9000"
    public_endpoint: Optional[str] = None
    access_key: SecretStr = SecretStr("minioadmin")
    secret_key: SecretStr = SecretStr("minioadmin")
    region: str = "us-east-1"
    bucket: str = "uploads"
    use_path_style_endpoint: bool = True
    
    # Upload defaults
    default_options: DefaultUploadOptions = Field(default_factory=DefaultUploadOptions)
    allowed_types: Dict[str, List[str]] = Field(
        default_factory=lambda: {category: list(extensions) for category, extensions in DEFAULT_ALLOWED_TYPES.items()}
    )
    max_unique_attempts: int = Field(default=1000, ge=1)
    metadata_probe_max_size: int = Field(default=50 * 1024 * 1024, gt=0)
    
    # Per-category parameter blocks
    image: ImageOptions = Field(default_factory=ImageOptions)
    compression: CompressionOptions = Field(default_factory=CompressionOptions)
    web_optimization: WebOptimizationOptions = Field(default_factory=WebOptimizationOptions)
    thumbnail: ThumbnailOptions = Field(default_factory=ThumbnailOptions)
    video: VideoOptions = Field(default_factory=VideoOptions)
    video_thumbnail: VideoThumbnailOptions = Field(default_factory=VideoThumbnailOptions)
    
    transcoder: TranscoderSettings = Field(default_factory=TranscoderSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    url: UrlSettings = Field(default_factory=UrlSettings)
    existence_check: ExistenceCheckSettings = Field(default_factory=ExistenceCheckSettings)
    
    @property
    def url_endpoint(self) -> str:
        """Endpoint used when building public URLs."""
        return (self.public_endpoint or self.endpoint).rstrip("/")


@lru_cache()
def get_settings() -> StorageSettings:
    """Get cached storage settings instance."""
    return StorageSettings()
