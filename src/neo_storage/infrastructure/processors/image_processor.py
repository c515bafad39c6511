"""Pillow image processor.

ONLY image transformation - general processing, compression, web
optimization, thumbnails and image info on top of Pillow.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from io import BytesIO
from typing import Any, Dict, Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from ...core.exceptions.processing_failed import ProcessingFailed
from ...core.value_objects.mime_type import normalize_format
from ...core.value_objects.transform_result import TransformResult
from ...core.value_objects.upload_options import (
    CompressionOptions,
    ImageOptions,
    ResizeOptions,
    ThumbnailOptions,
    WatermarkOptions,
    WebOptimizationOptions,
)
from .watermark import Watermarker

logger = logging.getLogger(__name__)


QUALITY_PRESETS: Dict[str, int] = {
    "low": 60,
    "medium": 75,
    "high": 85,
    "very_high": 95,
    "max": 100,
}

FORMAT_DEFAULT_QUALITY: Dict[str, int] = {
    "jpg": 85,
    "png": 90,
    "webp": 80,
    "avif": 75,
}

# Extension -> Pillow encoder name
PIL_FORMATS: Dict[str, str] = {
    "jpg": "JPEG",
    "png": "PNG",
    "webp": "WEBP",
    "avif": "AVIF",
    "gif": "GIF",
    "bmp": "BMP",
    "tiff": "TIFF",
}

# Pillow decoder name -> extension
FORMAT_EXTENSIONS: Dict[str, str] = {
    "JPEG": "jpg",
    "MPO": "jpg",
    "PNG": "png",
    "WEBP": "webp",
    "AVIF": "avif",
    "GIF": "gif",
    "BMP": "bmp",
    "TIFF": "tiff",
}

STEP_QUALITY = 5


def determine_quality(preset: Optional[str], quality: Optional[int], output_format: str) -> int:
    """Preset, else the clamped explicit quality, else the format default."""
    if preset and preset in QUALITY_PRESETS:
        return QUALITY_PRESETS[preset]
    if quality is not None:
        return max(1, min(100, quality))
    return FORMAT_DEFAULT_QUALITY.get(output_format, 85)


def quality_for_pixels(width: int, height: int) -> int:
    """Lower quality for larger images."""
    pixels = width * height
    if pixels > 8_000_000:
        return 75
    if pixels > 4_000_000:
        return 80
    return 85


def smart_quality(width: int, height: int) -> int:
    """Quality from image shape: panoramas keep more detail, huge images less."""
    aspect_ratio = width / height
    if aspect_ratio > 2 or aspect_ratio < 0.5:
        return 85
    if width > 3000 or height > 3000:
        return 80
    return 85


class PillowImageProcessor:
    """Image processor backed by Pillow.
    
    Every transform returns the encoded bytes with the format they are
    really encoded in, so callers can rewrite the stored extension.
    """
    
    def __init__(self, watermarker: Optional[Watermarker] = None):
        self._watermarker = watermarker or Watermarker()
    
    # Public transforms
    
    def process(self, content: bytes, options: ImageOptions) -> TransformResult:
        """General processing: orientation, bounds, resize, watermark, conversion."""
        image, source_format = self._open(content)
        if options.auto_orient:
            image = ImageOps.exif_transpose(image)
        
        quality = options.quality
        output_format = normalize_format(options.target_format) if options.target_format else None
        
        if options.optimize:
            if quality is None:
                quality = quality_for_pixels(image.width, image.height)
            if output_format is None:
                output_format = self._optimized_format(image)
        
        if options.max_width or options.max_height:
            image = self._scale_down(image, options.max_width, options.max_height)
        
        if options.resize and (options.resize.width or options.resize.height):
            image = self._resize(image, options.resize)
        
        if options.smart_compression and quality is None:
            quality = smart_quality(image.width, image.height)
        
        image, watermark = self._apply_watermark(image, options.watermark)
        
        output_format = output_format or source_format
        quality = determine_quality(options.quality_preset, quality, output_format)
        encoded = self._encode(
            image,
            output_format,
            quality,
            progressive=options.progressive,
            optimize=options.optimize,
            exif=None if options.strip_metadata else image.info.get("exif"),
        )
        
        logger.info(f"Image processed: {image.width}x{image.height} {output_format} q{quality}")
        return self._result(content, encoded, output_format, quality, watermark)
    
    def compress(self, content: bytes, options: CompressionOptions) -> TransformResult:
        """Encode at a fixed quality, or search down toward ``target_size``."""
        image, _ = self._open(content)
        image = ImageOps.exif_transpose(image)
        image, watermark = self._apply_watermark(image, options.watermark)
        output_format = normalize_format(options.format)
        
        if options.target_size:
            encoded, quality = self._compress_to_target(image, output_format, options)
        else:
            quality = determine_quality(options.quality_preset, options.quality, output_format)
            encoded = self._encode(image, output_format, quality, progressive=options.progressive, optimize=True)
        
        logger.info(f"Image compressed: {len(content)} -> {len(encoded)} bytes at q{quality}")
        return self._result(content, encoded, output_format, quality, watermark)
    
    def optimize_for_web(self, content: bytes, options: WebOptimizationOptions) -> TransformResult:
        """Scale down to the web bounds and recompress."""
        image, _ = self._open(content)
        if options.auto_orient:
            image = ImageOps.exif_transpose(image)
        
        image = self._scale_down(image, options.max_width, options.max_height)
        image, watermark = self._apply_watermark(image, options.watermark)
        
        output_format = normalize_format(options.format)
        encoded = self._encode(
            image,
            output_format,
            options.quality,
            progressive=options.progressive,
            optimize=True,
            exif=None if options.strip_metadata else image.info.get("exif"),
        )
        
        logger.info(f"Image optimized for web: {image.width}x{image.height} {output_format}")
        return self._result(content, encoded, output_format, options.quality, watermark)
    
    def create_thumbnail(self, content: bytes, options: ThumbnailOptions, default_format: str) -> TransformResult:
        """Thumbnail cut from ``content``; no watermark is applied."""
        image, _ = self._open(content)
        image = ImageOps.exif_transpose(image)
        size = (options.width, options.height)
        
        if options.method == "fit":
            image = ImageOps.pad(image, size, method=Image.Resampling.LANCZOS, color=self._pad_color(image))
        elif options.method == "crop":
            image = ImageOps.fit(image, size, method=Image.Resampling.LANCZOS)
        elif options.method == "resize":
            image = image.resize(size, Image.Resampling.LANCZOS)
        else:
            image = self._scale_down(image, options.width, options.height)
        
        output_format = normalize_format(options.format or default_format)
        encoded = self._encode(image, output_format, options.quality, optimize=options.optimize)
        
        result = self._result(content, encoded, output_format, options.quality, None)
        result.metadata.update({"width": image.width, "height": image.height, "method": options.method})
        return result
    
    def get_image_info(self, content: bytes) -> Dict[str, Any]:
        """Dimensions, aspect ratio, size and megapixels."""
        image, source_format = self._open(content)
        return {
            "width": image.width,
            "height": image.height,
            "aspect_ratio": round(image.width / image.height, 2) if image.height else None,
            "file_size": len(content),
            "megapixels": round(image.width * image.height / 1_000_000, 2),
            "format": source_format,
        }
    
    # Helpers
    
    def _open(self, content: bytes) -> Tuple[Image.Image, str]:
        try:
            image = Image.open(BytesIO(content))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise ProcessingFailed(
                message=f"Cannot decode image: {e}",
                processor="pillow",
                operation="decode",
            ) from e
        
        source_format = FORMAT_EXTENSIONS.get(image.format or "", "png")
        return image, source_format
    
    @staticmethod
    def _optimized_format(image: Image.Image) -> str:
        """jpg for large or opaque images, png for small images with transparency."""
        has_alpha = "A" in image.getbands() or "transparency" in image.info
        if image.width * image.height > 2_000_000 or not has_alpha:
            return "jpg"
        return "png"
    
    @staticmethod
    def _pad_color(image: Image.Image):
        return (0, 0, 0, 0) if "A" in image.getbands() else "white"
    
    @staticmethod
    def _scale_down(image: Image.Image, max_width: Optional[int], max_height: Optional[int]) -> Image.Image:
        """Shrink to fit within the bounds keeping the aspect ratio; never enlarge."""
        bound_width = max_width or image.width
        bound_height = max_height or image.height
        if image.width <= bound_width and image.height <= bound_height:
            return image
        
        image = image.copy()
        image.thumbnail((bound_width, bound_height), Image.Resampling.LANCZOS)
        return image
    
    def _resize(self, image: Image.Image, resize: ResizeOptions) -> Image.Image:
        width, height = resize.width, resize.height
        if not width or not height:
            # One dimension given: scale proportionally
            ratio = (width / image.width) if width else (height / image.height)
            return image.resize(
                (max(1, round(image.width * ratio)), max(1, round(image.height * ratio))),
                Image.Resampling.LANCZOS,
            )
        
        size = (width, height)
        if resize.method in ("fit", "contain"):
            return ImageOps.pad(image, size, method=Image.Resampling.LANCZOS, color=self._pad_color(image))
        if resize.method in ("crop", "cover", "fill"):
            return ImageOps.fit(image, size, method=Image.Resampling.LANCZOS)
        if resize.method in ("stretch", "force"):
            return image.resize(size, Image.Resampling.LANCZOS)
        return ImageOps.contain(image, size, method=Image.Resampling.LANCZOS)
    
    def _apply_watermark(
        self,
        image: Image.Image,
        watermark: Optional[WatermarkOptions]
    ) -> Tuple[Image.Image, Optional[Dict[str, Any]]]:
        if watermark is None:
            return image, None
        return self._watermarker.apply(image, watermark)
    
    def _compress_to_target(
        self,
        image: Image.Image,
        output_format: str,
        options: CompressionOptions
    ) -> Tuple[bytes, int]:
        for quality in range(options.max_quality, options.min_quality - 1, -STEP_QUALITY):
            encoded = self._encode(image, output_format, quality, progressive=options.progressive, optimize=True)
            if len(encoded) <= options.target_size:
                return encoded, quality
        
        logger.debug(f"Target size {options.target_size} not reached, using min quality {options.min_quality}")
        encoded = self._encode(image, output_format, options.min_quality, progressive=options.progressive, optimize=True)
        return encoded, options.min_quality
    
    def _encode(
        self,
        image: Image.Image,
        output_format: str,
        quality: int,
        progressive: bool = False,
        optimize: bool = False,
        exif: Optional[bytes] = None
    ) -> bytes:
        pil_format = PIL_FORMATS.get(output_format)
        if pil_format is None:
            raise ProcessingFailed(
                message=f"Unsupported output format: {output_format}",
                processor="pillow",
                operation="encode",
            )
        
        params: Dict[str, Any] = {}
        if pil_format == "JPEG":
            image = self._flatten(image)
            params.update(quality=quality, optimize=optimize, progressive=progressive)
        elif pil_format in ("WEBP", "AVIF"):
            params["quality"] = quality
        elif pil_format == "PNG":
            params["optimize"] = optimize
        
        if exif and pil_format in ("JPEG", "WEBP", "PNG"):
            params["exif"] = exif
        
        icc_profile = image.info.get("icc_profile")
        if icc_profile and pil_format in ("JPEG", "WEBP", "PNG"):
            params["icc_profile"] = icc_profile
        
        buffer = BytesIO()
        try:
            image.save(buffer, format=pil_format, **params)
        except (OSError, ValueError, KeyError) as e:
            raise ProcessingFailed(
                message=f"Cannot encode image as {output_format}: {e}",
                processor="pillow",
                operation="encode",
            ) from e
        return buffer.getvalue()
    
    @staticmethod
    def _flatten(image: Image.Image) -> Image.Image:
        """Composite transparency onto white for formats without alpha."""
        if image.mode in ("RGB", "L"):
            return image
        if image.mode == "P":
            image = image.convert("RGBA")
        if "A" in image.getbands():
            background = Image.new("RGB", image.size, "white")
            background.paste(image, mask=image.getchannel("A"))
            return background
        return image.convert("RGB")
    
    @staticmethod
    def _result(
        original: bytes,
        encoded: bytes,
        output_format: str,
        quality: int,
        watermark: Optional[Dict[str, Any]]
    ) -> TransformResult:
        metadata: Dict[str, Any] = {
            "original_size": len(original),
            "final_size": len(encoded),
            "compression_ratio": round((1 - len(encoded) / len(original)) * 100, 2) if original else 0,
            "format": output_format,
            "quality": quality,
        }
        if watermark:
            metadata["watermark"] = watermark
        return TransformResult(content=encoded, format=output_format, metadata=metadata)
