"""Pillow image processor tests."""

import pytest
from PIL import Image

from neo_storage.core.exceptions import ProcessingFailed
from neo_storage.core.value_objects.upload_options import (
    CompressionOptions,
    ImageOptions,
    ResizeOptions,
    ThumbnailOptions,
    WatermarkOptions,
    WebOptimizationOptions,
)
from neo_storage.infrastructure.processors.image_processor import (
    PillowImageProcessor,
    determine_quality,
    quality_for_pixels,
    smart_quality,
)
from neo_storage.infrastructure.processors.watermark import Watermarker

from conftest import make_image, open_image


class TestQuality:
    
    @pytest.mark.parametrize("preset,quality,output_format,expected", [
        ("high", 40, "jpg", 85),
        ("max", None, "webp", 100),
        (None, 150, "png", 100),
        (None, 0, "png", 1),
        (None, None, "webp", 80),
        (None, None, "png", 90),
        (None, None, "bmp", 85),
    ])
    def test_determine_quality(self, preset, quality, output_format, expected):
        assert determine_quality(preset, quality, output_format) == expected
    
    @pytest.mark.parametrize("size,expected", [
        ((4000, 3000), 75),
        ((2500, 2000), 80),
        ((800, 600), 85),
    ])
    def test_quality_for_pixels(self, size, expected):
        assert quality_for_pixels(*size) == expected
    
    def test_smart_quality(self):
        assert smart_quality(3000, 1000) == 85
        assert smart_quality(4000, 3500) == 80
        assert smart_quality(800, 600) == 85
    
    @pytest.mark.parametrize("mode,size,expected", [
        ("RGB", (100, 100), "jpg"),
        ("RGBA", (100, 100), "png"),
        ("RGBA", (2000, 1500), "jpg"),
    ])
    def test_optimized_format(self, mode, size, expected):
        assert PillowImageProcessor._optimized_format(Image.new(mode, size)) == expected


class TestPillowImageProcessor:
    
    @pytest.fixture
    def processor(self):
        return PillowImageProcessor()
    
    def test_process_keeps_source_format(self, processor, png_bytes):
        result = processor.process(png_bytes, ImageOptions())
        
        assert result.format == "png"
        assert result.metadata["quality"] == 90
        assert open_image(result.content).size == (400, 300)
    
    def test_process_scales_to_bounds(self, processor, png_bytes):
        result = processor.process(png_bytes, ImageOptions(max_width=100, max_height=100))
        
        assert open_image(result.content).size == (100, 75)
    
    def test_process_proportional_resize(self, processor, png_bytes):
        result = processor.process(png_bytes, ImageOptions(resize=ResizeOptions(width=200)))
        
        assert open_image(result.content).size == (200, 150)
    
    def test_process_crop_resize(self, processor, png_bytes):
        result = processor.process(png_bytes, ImageOptions(resize=ResizeOptions(width=100, height=100, method="crop")))
        
        assert open_image(result.content).size == (100, 100)
    
    def test_process_convert(self, processor, png_bytes):
        result = processor.process(png_bytes, ImageOptions(convert="webp"))
        
        assert result.format == "webp"
        assert open_image(result.content).format == "WEBP"
    
    def test_process_optimize_picks_jpg_for_opaque(self, processor, png_bytes):
        result = processor.process(png_bytes, ImageOptions(optimize=True))
        
        assert result.format == "jpg"
        assert result.metadata["quality"] == 85
    
    def test_process_optimize_keeps_png_for_alpha(self, processor):
        result = processor.process(make_image("PNG", (100, 100), mode="RGBA"), ImageOptions(optimize=True))
        
        assert result.format == "png"
    
    def test_jpeg_output_flattens_alpha(self, processor):
        result = processor.process(make_image("PNG", (50, 50), mode="RGBA"), ImageOptions(format="jpeg"))
        
        assert result.format == "jpg"
        assert open_image(result.content).mode == "RGB"
    
    def test_compress_fixed_quality(self, processor, png_bytes):
        result = processor.compress(png_bytes, CompressionOptions(quality=40))
        
        assert result.format == "jpg"
        assert result.metadata["quality"] == 40
        assert result.metadata["original_size"] == len(png_bytes)
        assert result.metadata["final_size"] == len(result.content)
    
    def test_compress_unreachable_target_uses_min_quality(self, processor, png_bytes):
        result = processor.compress(png_bytes, CompressionOptions(target_size=1, min_quality=50, max_quality=70))
        
        assert result.metadata["quality"] == 50
    
    def test_compress_reachable_target_uses_first_fit(self, processor, png_bytes):
        result = processor.compress(png_bytes, CompressionOptions(target_size=10_000_000))
        
        assert result.metadata["quality"] == 95
    
    def test_compress_unsupported_format(self, processor, png_bytes):
        with pytest.raises(ProcessingFailed):
            processor.compress(png_bytes, CompressionOptions(format="xyz"))
    
    def test_web_optimization(self, processor):
        large = make_image("PNG", (3840, 2160))
        
        result = processor.optimize_for_web(large, WebOptimizationOptions())
        
        assert result.format == "jpg"
        assert result.metadata["quality"] == 85
        assert open_image(result.content).size == (1920, 1080)
    
    def test_thumbnail_fit_pads_to_box(self, processor, png_bytes):
        result = processor.create_thumbnail(png_bytes, ThumbnailOptions(width=150, height=150), "png")
        
        assert open_image(result.content).size == (150, 150)
        assert result.metadata["method"] == "fit"
    
    def test_thumbnail_proportional(self, processor, png_bytes):
        result = processor.create_thumbnail(png_bytes, ThumbnailOptions(width=150, height=150, method="proportional"), "png")
        
        width, height = open_image(result.content).size
        assert width == 150
        assert height < 150
    
    def test_thumbnail_format_override(self, processor, png_bytes):
        result = processor.create_thumbnail(png_bytes, ThumbnailOptions(format="webp"), "png")
        
        assert result.format == "webp"
    
    def test_image_info(self, processor, png_bytes):
        info = processor.get_image_info(png_bytes)
        
        assert info == {
            "width": 400,
            "height": 300,
            "aspect_ratio": 1.33,
            "file_size": len(png_bytes),
            "megapixels": 0.12,
            "format": "png",
        }
    
    def test_undecodable_input(self, processor):
        with pytest.raises(ProcessingFailed) as exc_info:
            processor.process(b"not an image", ImageOptions())
        
        assert exc_info.value.error_code == "PROCESSING_FAILED"


class TestWatermarker:
    
    @pytest.fixture
    def mark_path(self, tmp_path):
        path = tmp_path / "logo.png"
        path.write_bytes(make_image("PNG", (100, 50), mode="RGBA"))
        return path
    
    @pytest.mark.parametrize("options,image_size,expected", [
        (WatermarkOptions(), (400, 300), (50, 25)),
        (WatermarkOptions(resize_method="percentage", size_ratio=0.1), (1000, 800), (100, 50)),
        (WatermarkOptions(resize_method="fixed", width=200, height=200), (1000, 800), (200, 100)),
    ])
    def test_calculate_size(self, options, image_size, expected):
        assert Watermarker.calculate_size((100, 50), image_size, options) == expected
    
    @pytest.mark.parametrize("position,expected", [
        ("bottom-right", (340, 265)),
        ("top-left", (10, 10)),
        ("top", (175, 10)),
        ("center", (175, 137)),
        ("left", (10, 137)),
    ])
    def test_calculate_position(self, position, expected):
        assert Watermarker.calculate_position((400, 300), (50, 25), position, 10) == expected
    
    def test_apply(self, mark_path):
        image = Image.new("RGB", (400, 300), "white")
        
        result, metadata = Watermarker().apply(image, WatermarkOptions(path=str(mark_path)))
        
        assert result.mode == "RGB"
        assert result.size == (400, 300)
        assert metadata["watermark_applied"] is True
        assert metadata["watermark_filename"] == "logo.png"
        assert metadata["watermark_size"] == "50x25"
    
    def test_relative_path_uses_base(self, mark_path):
        watermarker = Watermarker(base_path=mark_path.parent)
        
        assert watermarker.resolve_path("logo.png") == mark_path
    
    def test_missing_file_skipped(self, tmp_path):
        image = Image.new("RGB", (10, 10))
        
        result, metadata = Watermarker().apply(image, WatermarkOptions(path=str(tmp_path / "missing.png")))
        
        assert result is image
        assert metadata is None
