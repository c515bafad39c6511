"""FFmpeg video processor.

ONLY video transcoding - ffmpeg/ffprobe driven transcode, frame capture
and probing through asyncio subprocesses.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import json
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ...config.settings import TranscoderSettings
from ...core.exceptions.processing_failed import ProcessingFailed
from ...core.exceptions.transcoder_unavailable import TranscoderUnavailable
from ...core.value_objects.upload_options import VideoOptions, VideoResizeOptions, VideoThumbnailOptions

logger = logging.getLogger(__name__)


QUALITY_PRESETS: Dict[str, Tuple[int, int]] = {
    "low": (640, 480),
    "medium": (1280, 720),
    "high": (1920, 1080),
    "ultra": (3840, 2160),
}

# Compression preset -> (video kbps, audio kbps)
COMPRESSION_PRESETS: Dict[str, Tuple[int, int]] = {
    "ultrafast": (5000, 128),
    "fast": (3000, 128),
    "medium": (2000, 128),
    "slow": (1500, 128),
    "veryslow": (1000, 128),
}

CODECS: Dict[str, List[str]] = {
    "mp4": ["-c:v", "libx264", "-pix_fmt", "yuv420p", "-c:a", "aac", "-movflags", "+faststart"],
    "webm": ["-c:v", "libvpx-vp9", "-c:a", "libopus"],
}

OVERLAY_POSITIONS: Dict[str, str] = {
    "top-left": "10:10",
    "top-right": "W-w-10:10",
    "bottom-left": "10:H-h-10",
    "bottom-right": "W-w-10:H-h-10",
    "center": "(W-w)/2:(H-h)/2",
}

ROTATIONS: Dict[int, str] = {
    90: "transpose=1",
    180: "transpose=1,transpose=1",
    270: "transpose=2",
}

# libx264 and vp9 need even frame dimensions
EVEN_DIMENSIONS = "scale=trunc(iw/2)*2:trunc(ih/2)*2"


def _bounded_scale(width: int, height: int) -> str:
    """Scale filter that only ever shrinks to fit within ``width`` x ``height``."""
    return f"scale='min({width},iw)':'min({height},ih)':force_original_aspect_ratio=decrease"


def _resize_filter(resize: VideoResizeOptions) -> Optional[str]:
    if resize.width and resize.height:
        if resize.mode == "stretch":
            return f"scale={resize.width}:{resize.height}"
        if resize.mode == "fill":
            return (
                f"scale={resize.width}:{resize.height}:force_original_aspect_ratio=increase,"
                f"crop={resize.width}:{resize.height}"
            )
        return f"scale={resize.width}:{resize.height}:force_original_aspect_ratio=decrease"
    if resize.width:
        return f"scale={resize.width}:-2"
    if resize.height:
        return f"scale=-2:{resize.height}"
    return None


def _parse_rate(rate: Optional[str]) -> Optional[float]:
    """Parse ffprobe frame rates such as ``30000/1001``."""
    if not rate:
        return None
    numerator, _, denominator = rate.partition("/")
    try:
        value = float(numerator) / float(denominator or 1)
    except (ValueError, ZeroDivisionError):
        return None
    return round(value, 2)


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class FfmpegVideoProcessor:
    """Video processor driving the ffmpeg and ffprobe binaries."""
    
    def __init__(self, settings: Optional[TranscoderSettings] = None):
        self._settings = settings or TranscoderSettings()
    
    def _binary(self, name: str) -> Optional[str]:
        return shutil.which(name)
    
    def is_available(self) -> bool:
        return bool(self._binary(self._settings.ffmpeg_binary) and self._binary(self._settings.ffprobe_binary))
    
    def _require(self, name: str) -> str:
        binary = self._binary(name)
        if binary is None:
            raise TranscoderUnavailable(message=f"Transcoder binary not found: {name}", binary=name)
        return binary
    
    async def _run(self, args: List[str], operation: str) -> bytes:
        """Run a binary, returning stdout; non-zero exit or timeout raises ProcessingFailed."""
        logger.debug(f"Running {operation}: {' '.join(args)}")
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self._settings.timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise ProcessingFailed(
                message=f"{operation} timed out after {self._settings.timeout}s",
                processor="ffmpeg",
                operation=operation,
            ) from e
        
        if process.returncode != 0:
            raise ProcessingFailed(
                message=f"{operation} failed: {stderr.decode(errors='ignore')[-500:]}",
                processor="ffmpeg",
                operation=operation,
                return_code=process.returncode,
            )
        return stdout
    
    def build_transcode_args(self, ffmpeg: str, input_path: Path, output_path: Path, options: VideoOptions) -> List[str]:
        """Assemble the ffmpeg command line for ``transcode``."""
        args = [ffmpeg, "-y"]
        
        if options.clip and options.clip.start:
            args += ["-ss", str(options.clip.start)]
        args += ["-i", str(input_path)]
        
        watermark_path = options.watermark.path if options.watermark else None
        if watermark_path and not Path(watermark_path).is_file():
            logger.warning(f"Video watermark not found, skipping: {watermark_path}")
            watermark_path = None
        if watermark_path:
            args += ["-i", watermark_path]
        
        if options.clip and options.clip.duration:
            args += ["-t", str(options.clip.duration)]
        
        filters = []
        resize_filter = _resize_filter(options.resize) if options.resize else None
        if resize_filter:
            filters.append(resize_filter)
        elif options.quality in QUALITY_PRESETS:
            filters.append(_bounded_scale(*QUALITY_PRESETS[options.quality]))
        if options.max_width or options.max_height:
            filters.append(_bounded_scale(options.max_width or 100000, options.max_height or 100000))
        if options.rotate in ROTATIONS:
            filters.append(ROTATIONS[options.rotate])
        filters.append(EVEN_DIMENSIONS)
        chain = ",".join(filters)
        
        if watermark_path:
            position = OVERLAY_POSITIONS.get(options.watermark.position, OVERLAY_POSITIONS["bottom-right"])
            args += [
                "-filter_complex", f"[0:v]{chain}[base];[base][1:v]overlay={position}[out]",
                "-map", "[out]", "-map", "0:a?",
            ]
        else:
            args += ["-vf", chain]
        
        args += CODECS[options.format]
        if options.format == "mp4" and options.compression:
            args += ["-preset", options.compression]
        
        preset_video, preset_audio = COMPRESSION_PRESETS.get(options.compression or "medium", COMPRESSION_PRESETS["medium"])
        args += ["-b:v", f"{options.video_bitrate or preset_video}k"]
        args += ["-b:a", f"{options.audio_bitrate or preset_audio}k"]
        
        if self._settings.threads:
            args += ["-threads", str(self._settings.threads)]
        
        args += list(options.additional_params)
        args.append(str(output_path))
        return args
    
    async def transcode(self, input_path: Path, output_path: Path, options: VideoOptions) -> Dict[str, Any]:
        ffmpeg = self._require(self._settings.ffmpeg_binary)
        args = self.build_transcode_args(ffmpeg, input_path, output_path, options)
        
        await self._run(args, "transcode")
        
        original_size = input_path.stat().st_size
        final_size = output_path.stat().st_size
        logger.info(f"Video transcoded: {original_size} -> {final_size} bytes ({options.format})")
        return {
            "original_size": original_size,
            "final_size": final_size,
            "compression_ratio": round((1 - final_size / original_size) * 100, 2) if original_size else 0,
            "format": options.format,
            "video_bitrate": options.video_bitrate,
            "audio_bitrate": options.audio_bitrate,
            "quality": options.quality,
        }
    
    async def capture_frame(self, input_path: Path, output_path: Path, options: VideoThumbnailOptions) -> None:
        ffmpeg = self._require(self._settings.ffmpeg_binary)
        
        # Clips shorter than the requested time fall back to the first frame
        for timestamp in dict.fromkeys([options.time, 0]):
            args = [
                ffmpeg, "-y",
                "-ss", str(timestamp),
                "-i", str(input_path),
                "-frames:v", "1",
                "-vf", f"scale={options.width}:{options.height}:force_original_aspect_ratio=decrease",
                "-q:v", "2",
                str(output_path),
            ]
            await self._run(args, "capture_frame")
            if output_path.is_file() and output_path.stat().st_size > 0:
                return
        
        raise ProcessingFailed(
            message=f"No frame captured from {input_path.name}",
            processor="ffmpeg",
            operation="capture_frame",
        )
    
    async def probe(self, path: Path) -> Dict[str, Any]:
        ffprobe = self._require(self._settings.ffprobe_binary)
        stdout = await self._run(
            [ffprobe, "-v", "quiet", "-print_format", "json", "-show_format", "-show_streams", str(path)],
            "probe",
        )
        return self.parse_probe(json.loads(stdout or b"{}"))
    
    @staticmethod
    def parse_probe(data: Dict[str, Any]) -> Dict[str, Any]:
        """Flatten ffprobe JSON into the metadata reported for videos."""
        media_format = data.get("format", {})
        info: Dict[str, Any] = {
            "duration": _to_float(media_format.get("duration")),
            "bitrate": _to_int(media_format.get("bit_rate")),
            "size": _to_int(media_format.get("size")),
            "format": media_format.get("format_name"),
        }
        
        for stream in data.get("streams", []):
            codec_type = stream.get("codec_type")
            if codec_type == "video" and "video" not in info:
                width, height = _to_int(stream.get("width")), _to_int(stream.get("height"))
                info["video"] = {
                    "width": width,
                    "height": height,
                    "codec": stream.get("codec_name"),
                    "bitrate": _to_int(stream.get("bit_rate")),
                    "fps": _parse_rate(stream.get("r_frame_rate")),
                    "aspect_ratio": round(width / height, 2) if width and height else None,
                }
            elif codec_type == "audio" and "audio" not in info:
                info["audio"] = {
                    "codec": stream.get("codec_name"),
                    "bitrate": _to_int(stream.get("bit_rate")),
                    "sample_rate": _to_int(stream.get("sample_rate")),
                    "channels": _to_int(stream.get("channels")),
                }
        
        return info
