"""Image watermarking.

ONLY watermark placement - sizing, positioning and opacity of an overlay
image on top of a Pillow image.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from ...core.value_objects.upload_options import WatermarkOptions

logger = logging.getLogger(__name__)

POSITIONS = (
    "top-left", "top", "top-right",
    "left", "center", "right",
    "bottom-left", "bottom", "bottom-right",
)


class Watermarker:
    """Place watermark images.
    
    Relative watermark paths resolve against ``base_path`` (the working
    directory by default). A missing or unreadable watermark is skipped with
    a warning.
    """
    
    def __init__(self, base_path: Optional[Path] = None):
        self._base_path = base_path
    
    def resolve_path(self, path: str) -> Path:
        resolved = Path(path).expanduser()
        if not resolved.is_absolute() and self._base_path is not None:
            resolved = self._base_path / resolved
        return resolved
    
    def apply(self, image: Image.Image, options: WatermarkOptions) -> Tuple[Image.Image, Optional[Dict[str, Any]]]:
        """Overlay the watermark onto ``image``.
        
        Returns:
            The watermarked image (or the input when skipped) and watermark
            metadata, None when skipped
        """
        if not options.path:
            logger.warning("Watermark path not provided")
            return image, None
        
        resolved = self.resolve_path(options.path)
        if not resolved.is_file():
            logger.warning(f"Watermark path not found: {options.path} (resolved to {resolved})")
            return image, None
        
        try:
            with Image.open(resolved) as source:
                watermark = source.convert("RGBA")
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"Watermark could not be read: {resolved}: {e}")
            return image, None
        
        if options.auto_resize:
            watermark = watermark.resize(self.calculate_size(watermark.size, image.size, options), Image.Resampling.LANCZOS)
        
        if options.opacity < 100:
            alpha = watermark.getchannel("A").point(lambda value: value * options.opacity // 100)
            watermark.putalpha(alpha)
        
        base = image.convert("RGBA")
        base.alpha_composite(watermark, self.calculate_position(base.size, watermark.size, options.position, options.margin))
        if "A" not in image.getbands():
            base = base.convert("RGB")
        
        metadata = {
            "watermark_applied": True,
            "watermark_path": str(resolved),
            "watermark_filename": resolved.name,
            "position": options.position,
            "opacity": options.opacity,
            "image_size": f"{image.width}x{image.height}",
            "watermark_size": f"{watermark.width}x{watermark.height}",
            "auto_resize": options.auto_resize,
            "resize_method": options.resize_method,
            "size_ratio": options.size_ratio,
        }
        logger.info(f"Watermark applied: {resolved.name} at {options.position}")
        return base, metadata
    
    @staticmethod
    def calculate_size(
        watermark_size: Tuple[int, int],
        image_size: Tuple[int, int],
        options: WatermarkOptions
    ) -> Tuple[int, int]:
        """Target watermark size, clamped to ``[min_size, max_size]`` keeping its aspect ratio."""
        mark_width, mark_height = watermark_size
        image_width, image_height = image_size
        
        if options.resize_method == "percentage":
            width = int(image_width * options.size_ratio)
            height = int(image_height * options.size_ratio)
        elif options.resize_method == "fixed":
            width = options.width or options.max_size
            height = options.height or options.max_size
        else:
            scale = min(image_width, image_height) * options.size_ratio / max(mark_width, mark_height)
            width = int(mark_width * scale)
            height = int(mark_height * scale)
        
        width = max(options.min_size, min(options.max_size, width))
        height = max(options.min_size, min(options.max_size, height))
        
        aspect_ratio = mark_width / mark_height
        if width / height > aspect_ratio:
            width = int(height * aspect_ratio)
        else:
            height = int(width / aspect_ratio)
        
        return max(1, width), max(1, height)
    
    @staticmethod
    def calculate_position(
        image_size: Tuple[int, int],
        watermark_size: Tuple[int, int],
        position: str,
        margin: int
    ) -> Tuple[int, int]:
        """Top-left corner for the watermark at a named anchor."""
        image_width, image_height = image_size
        mark_width, mark_height = watermark_size
        
        vertical, _, horizontal = position.partition("-")
        if not horizontal:
            vertical, horizontal = {
                "top": ("top", "center"),
                "bottom": ("bottom", "center"),
                "left": ("center", "left"),
                "right": ("center", "right"),
            }.get(position, ("center", "center"))
        
        x = {
            "left": margin,
            "right": image_width - mark_width - margin,
        }.get(horizontal, (image_width - mark_width) // 2)
        y = {
            "top": margin,
            "bottom": image_height - mark_height - margin,
        }.get(vertical, (image_height - mark_height) // 2)
        
        return max(0, x), max(0, y)
