"""Upload options value objects.

ONLY upload options - typed option blocks accepted by the upload pipeline
and the documented merge that layers them.

Merge order, each later layer overriding only the keys it sets:
1. hard-coded model defaults
2. process-wide settings blocks
3. caller-supplied options
4. per-branch forced overrides (applied by the processors)

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, List, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

M = TypeVar("M", bound=BaseModel)

QualityPreset = Literal["low", "medium", "high", "very_high", "max"]


class OptionBlock(BaseModel):
    """Base for option blocks: unknown keys are ignored."""
    
    model_config = ConfigDict(extra="ignore")


class WatermarkOptions(OptionBlock):
    """Image watermark overlay."""
    
    path: Optional[str] = None
    auto_resize: bool = True
    resize_method: Literal["proportional", "percentage", "fixed"] = "proportional"
    size_ratio: float = Field(default=0.15, gt=0, le=1)
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    min_size: int = Field(default=50, gt=0)
    max_size: int = Field(default=400, gt=0)
    position: str = "bottom-right"
    opacity: int = Field(default=70, ge=0, le=100)
    margin: int = Field(default=10, ge=0)


class ResizeOptions(OptionBlock):
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    method: str = "fit"


class ImageOptions(OptionBlock):
    """General image processing parameters."""
    
    quality: Optional[int] = Field(default=None, ge=1, le=100)
    quality_preset: Optional[QualityPreset] = None
    max_width: Optional[int] = Field(default=2048, gt=0)
    max_height: Optional[int] = Field(default=2048, gt=0)
    auto_orient: bool = True
    strip_metadata: bool = True
    optimize: bool = False
    smart_compression: bool = False
    progressive: bool = False
    format: Optional[str] = None
    convert: Optional[str] = None
    resize: Optional[ResizeOptions] = None
    watermark: Optional[WatermarkOptions] = None
    
    @property
    def target_format(self) -> Optional[str]:
        """Requested output format, ``convert`` winning over ``format``."""
        return self.convert or self.format


class CompressionOptions(OptionBlock):
    """Dedicated compression transform parameters."""
    
    quality: int = Field(default=80, ge=1, le=100)
    quality_preset: Optional[QualityPreset] = None
    format: str = "jpg"
    target_size: Optional[int] = Field(default=None, gt=0)
    max_quality: int = Field(default=95, ge=1, le=100)
    min_quality: int = Field(default=60, ge=1, le=100)
    progressive: bool = True
    watermark: Optional[WatermarkOptions] = None
    
    @model_validator(mode="after")
    def _check_quality_bounds(self) -> "CompressionOptions":
        if self.min_quality > self.max_quality:
            raise ValueError("min_quality must be <= max_quality")
        return self


class WebOptimizationOptions(OptionBlock):
    """Resize-to-bounds plus recompression for web delivery."""
    
    max_width: int = Field(default=1920, gt=0)
    max_height: int = Field(default=1080, gt=0)
    quality: int = Field(default=85, ge=1, le=100)
    format: str = "jpg"
    progressive: bool = True
    strip_metadata: bool = True
    auto_orient: bool = True
    watermark: Optional[WatermarkOptions] = None


class ThumbnailOptions(OptionBlock):
    """Thumbnail artifact parameters.
    
    ``path`` of None places thumbnails in ``<main dir>/thumbnails``;
    ``format`` of None keeps the main artifact's format.
    """
    
    width: int = Field(default=200, gt=0)
    height: int = Field(default=200, gt=0)
    method: Literal["fit", "crop", "proportional", "scale", "resize"] = "fit"
    quality: int = Field(default=75, ge=1, le=100)
    suffix: str = "-thumb"
    path: Optional[str] = None
    optimize: bool = True
    format: Optional[str] = None


class VideoResizeOptions(OptionBlock):
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    mode: Literal["fit", "fill", "stretch"] = "fit"


class ClipOptions(OptionBlock):
    start: float = Field(default=0, ge=0)
    duration: Optional[float] = Field(default=None, gt=0)


class VideoWatermarkOptions(OptionBlock):
    path: str
    position: str = "bottom-right"


class VideoOptions(OptionBlock):
    """Video transcoding parameters."""
    
    resize: Optional[VideoResizeOptions] = None
    quality: Optional[Literal["low", "medium", "high", "ultra"]] = "medium"
    clip: Optional[ClipOptions] = None
    rotate: Optional[Literal[90, 180, 270]] = None
    watermark: Optional[VideoWatermarkOptions] = None
    format: Literal["mp4", "webm"] = "mp4"
    video_bitrate: Optional[int] = Field(default=2000, gt=0)
    audio_bitrate: Optional[int] = Field(default=128, gt=0)
    compression: Optional[Literal["ultrafast", "fast", "medium", "slow", "veryslow"]] = "medium"
    max_width: Optional[int] = Field(default=1920, gt=0)
    max_height: Optional[int] = Field(default=1080, gt=0)
    additional_params: List[str] = Field(default_factory=list)


class VideoThumbnailOptions(OptionBlock):
    """Video frame capture parameters."""
    
    width: int = Field(default=320, gt=0)
    height: int = Field(default=240, gt=0)
    time: float = Field(default=5, ge=0)
    suffix: str = "-thumb"
    path: Optional[str] = None


class UrlOptions(OptionBlock):
    """URL generation request; None defers to process-wide settings."""
    
    signed: Optional[bool] = None
    expiration: Optional[int] = Field(default=None, gt=0)


class DefaultUploadOptions(OptionBlock):
    """Process-wide defaults for the top-level upload switches."""
    
    scan: bool = True
    naming: str = "hash"
    preserve_structure: bool = True


class UploadOptions(BaseModel):
    """Options accepted by a single upload call.
    
    Top-level switches left as None fall back to ``DefaultUploadOptions``.
    ``naming`` accepts a strategy tag or a naming strategy object.
    """
    
    model_config = ConfigDict(extra="ignore", arbitrary_types_allowed=True, populate_by_name=True)
    
    scan: Optional[bool] = None
    naming: Optional[Any] = None
    preserve_structure: Optional[bool] = None
    allowed_types: Optional[Dict[str, List[str]]] = None
    compress: bool = False
    optimize: bool = False
    optimize_for_web: bool = False
    image: Optional[ImageOptions] = None
    compression: Optional[CompressionOptions] = Field(default=None, alias="compression_options")
    web: Optional[WebOptimizationOptions] = Field(default=None, alias="web_options")
    thumbnail: Optional[ThumbnailOptions] = None
    watermark: Optional[WatermarkOptions] = None
    video: Optional[VideoOptions] = None
    video_thumbnail: Optional[VideoThumbnailOptions] = None
    url: UrlOptions = Field(default_factory=UrlOptions)
    
    @model_validator(mode="before")
    @classmethod
    def _fold_legacy_url_keys(cls, data: Any) -> Any:
        """Fold top-level ``signed`` / ``url_expiration`` into ``url``; they override the block."""
        if not isinstance(data, dict):
            return data
        if "signed" not in data and "url_expiration" not in data:
            return data
        
        data = dict(data)
        url = dict(data.get("url") or {})
        if "signed" in data:
            url["signed"] = data.pop("signed")
        if "url_expiration" in data:
            url["expiration"] = data.pop("url_expiration")
        data["url"] = url
        return data
    
    @field_validator("thumbnail", "video", "video_thumbnail", "image", mode="before")
    @classmethod
    def _expand_flags(cls, value: Any) -> Any:
        """Allow ``True`` as shorthand for a block with default parameters."""
        if value is True:
            return {}
        if value is False:
            return None
        return value
    
    @field_validator("watermark", mode="before")
    @classmethod
    def _expand_watermark_path(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"path": value}
        return value


def merge_models(base: M, override: Optional[BaseModel]) -> M:
    """Overlay the explicitly set fields of ``override`` onto ``base``.
    
    Returns a new instance of ``base``'s type; neither input is modified.
    """
    if override is None:
        return base
    
    data = base.model_dump()
    data.update(override.model_dump(exclude_unset=True))
    return type(base).model_validate(data)


def merge_upload_options(
    defaults: DefaultUploadOptions,
    options: Union[UploadOptions, Dict[str, Any], None],
) -> UploadOptions:
    """Resolve call options against process-wide top-level defaults."""
    if options is None:
        options = UploadOptions()
    elif isinstance(options, dict):
        options = UploadOptions.model_validate(options)
    
    return options.model_copy(update={
        "scan": defaults.scan if options.scan is None else options.scan,
        "naming": defaults.naming if options.naming is None else options.naming,
        "preserve_structure": (
            defaults.preserve_structure
            if options.preserve_structure is None
            else options.preserve_structure
        ),
    })
