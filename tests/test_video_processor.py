"""FFmpeg video processor tests; no real binaries are executed."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from neo_storage.config.settings import TranscoderSettings
from neo_storage.core.exceptions import ProcessingFailed, TranscoderUnavailable
from neo_storage.core.value_objects.upload_options import (
    ClipOptions,
    VideoOptions,
    VideoResizeOptions,
    VideoThumbnailOptions,
    VideoWatermarkOptions,
)
from neo_storage.infrastructure.processors import video_processor as video_module
from neo_storage.infrastructure.processors.video_processor import FfmpegVideoProcessor


def _fake_process(returncode=0, stdout=b"", stderr=b""):
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    return process


class TestAvailability:
    
    def test_available_when_both_binaries_found(self, monkeypatch):
        monkeypatch.setattr(video_module.shutil, "which", lambda name: f"/usr/bin/{name}")
        
        assert FfmpegVideoProcessor().is_available() is True
    
    def test_unavailable_without_ffprobe(self, monkeypatch):
        monkeypatch.setattr(video_module.shutil, "which", lambda name: None if name == "ffprobe" else f"/usr/bin/{name}")
        
        assert FfmpegVideoProcessor().is_available() is False
    
    @pytest.mark.asyncio
    async def test_transcode_requires_binary(self, monkeypatch, tmp_path):
        monkeypatch.setattr(video_module.shutil, "which", lambda name: None)
        
        with pytest.raises(TranscoderUnavailable) as exc_info:
            await FfmpegVideoProcessor().transcode(tmp_path / "in.mp4", tmp_path / "out.mp4", VideoOptions())
        
        assert exc_info.value.binary == "ffmpeg"


class TestTranscodeArgs:
    
    @pytest.fixture
    def processor(self):
        return FfmpegVideoProcessor(TranscoderSettings(threads=4))
    
    def _args(self, processor, options):
        return processor.build_transcode_args("ffmpeg", Path("in.mov"), Path("out.mp4"), options)
    
    def test_default_mp4(self, processor):
        args = self._args(processor, VideoOptions())
        
        assert args[:4] == ["ffmpeg", "-y", "-i", "in.mov"]
        assert "libx264" in args
        assert args[args.index("-preset") + 1] == "medium"
        assert args[args.index("-b:v") + 1] == "2000k"
        assert args[args.index("-b:a") + 1] == "128k"
        assert args[args.index("-threads") + 1] == "4"
        assert args[-1] == "out.mp4"
        assert args[args.index("-vf") + 1].endswith("scale=trunc(iw/2)*2:trunc(ih/2)*2")
    
    def test_webm_has_no_x264_preset(self, processor):
        args = self._args(processor, VideoOptions(format="webm"))
        
        assert "libvpx-vp9" in args
        assert "-preset" not in args
    
    def test_clip_and_rotation(self, processor):
        args = self._args(processor, VideoOptions(clip=ClipOptions(start=3, duration=10), rotate=90))
        
        assert args[args.index("-ss") + 1] == "3.0"
        assert args.index("-ss") < args.index("-i")
        assert args[args.index("-t") + 1] == "10.0"
        assert "transpose=1" in args[args.index("-vf") + 1]
    
    def test_explicit_resize_replaces_quality_scale(self, processor):
        args = self._args(processor, VideoOptions(resize=VideoResizeOptions(width=640, height=360, mode="fill"), quality="low"))
        
        chain = args[args.index("-vf") + 1]
        assert chain.startswith("scale=640:360:force_original_aspect_ratio=increase,crop=640:360")
        assert "min(640,iw)" not in chain
    
    def test_bitrate_falls_back_to_compression_preset(self, processor):
        args = self._args(processor, VideoOptions(video_bitrate=None, compression="slow"))
        
        assert args[args.index("-b:v") + 1] == "1500k"
    
    def test_watermark_overlay(self, processor, tmp_path):
        mark = tmp_path / "mark.png"
        mark.write_bytes(b"png")
        
        args = self._args(processor, VideoOptions(watermark=VideoWatermarkOptions(path=str(mark), position="top-left")))
        
        assert "-vf" not in args
        assert args[args.index("-filter_complex") + 1].endswith("overlay=10:10[out]")
        assert str(mark) in args
    
    def test_missing_watermark_skipped(self, processor):
        args = self._args(processor, VideoOptions(watermark=VideoWatermarkOptions(path="/no/such/mark.png")))
        
        assert "-filter_complex" not in args
        assert "/no/such/mark.png" not in args
    
    def test_additional_params_before_output(self, processor):
        args = self._args(processor, VideoOptions(additional_params=["-an"]))
        
        assert args[-2:] == ["-an", "out.mp4"]


class TestRun:
    
    @pytest.fixture
    def processor(self, monkeypatch):
        monkeypatch.setattr(video_module.shutil, "which", lambda name: f"/usr/bin/{name}")
        return FfmpegVideoProcessor()
    
    @pytest.mark.asyncio
    async def test_probe_parses_output(self, processor, monkeypatch, tmp_path):
        payload = {
            "format": {"duration": "12.5", "bit_rate": "800000", "size": "1250000", "format_name": "mov,mp4"},
            "streams": [
                {"codec_type": "video", "width": 1280, "height": 720, "codec_name": "h264", "r_frame_rate": "30000/1001"},
                {"codec_type": "audio", "codec_name": "aac", "sample_rate": "48000", "channels": 2},
            ],
        }
        create = AsyncMock(return_value=_fake_process(stdout=json.dumps(payload).encode()))
        monkeypatch.setattr(video_module.asyncio, "create_subprocess_exec", create)
        
        info = await processor.probe(tmp_path / "clip.mp4")
        
        assert create.call_args.args[0] == "/usr/bin/ffprobe"
        assert info["duration"] == 12.5
        assert info["video"]["fps"] == 29.97
        assert info["video"]["aspect_ratio"] == 1.78
        assert info["audio"]["channels"] == 2
    
    @pytest.mark.asyncio
    async def test_non_zero_exit(self, processor, monkeypatch, tmp_path):
        create = AsyncMock(return_value=_fake_process(returncode=1, stderr=b"moov atom not found"))
        monkeypatch.setattr(video_module.asyncio, "create_subprocess_exec", create)
        
        with pytest.raises(ProcessingFailed) as exc_info:
            await processor.probe(tmp_path / "clip.mp4")
        
        assert "moov atom not found" in exc_info.value.message
    
    @pytest.mark.asyncio
    async def test_capture_falls_back_to_first_frame(self, processor, monkeypatch, tmp_path):
        output = tmp_path / "thumb.jpg"
        calls = []
        
        async def create(*args, **kwargs):
            calls.append(args)
            if args[args.index("-ss") + 1] == "0":
                output.write_bytes(b"\xff\xd8\xff")
            return _fake_process()
        
        monkeypatch.setattr(video_module.asyncio, "create_subprocess_exec", create)
        
        await processor.capture_frame(tmp_path / "clip.mp4", output, VideoThumbnailOptions(time=30))
        
        assert [call[call.index("-ss") + 1] for call in calls] == ["30.0", "0"]


class TestParseProbe:
    
    def test_missing_fields(self):
        info = FfmpegVideoProcessor.parse_probe({})
        
        assert info == {"duration": None, "bitrate": None, "size": None, "format": None}
    
    def test_bad_frame_rate(self):
        info = FfmpegVideoProcessor.parse_probe({"streams": [{"codec_type": "video", "r_frame_rate": "0/0"}]})
        
        assert info["video"]["fps"] is None
        assert info["video"]["aspect_ratio"] is None
