"""Pytest configuration and fixtures for neo-storage tests."""

from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest
from PIL import Image

from neo_storage.config.settings import StorageSettings
from neo_storage.core.exceptions.file_not_found import FileNotFound
from neo_storage.core.value_objects.object_stat import ObjectStat
from neo_storage.factory import create_storage_service
from neo_storage.infrastructure.processors.image_processor import PillowImageProcessor


class InMemoryObjectStore:
    """Object store fake keeping objects in a dict.
    
    ``lag`` makes a freshly written key report as absent for that many
    ``exists`` calls, mimicking an eventually consistent backend.
    """
    
    def __init__(self, bucket: str = "media", lag: int = 0):
        self._bucket = bucket
        self.lag = lag
        self.objects: Dict[str, Tuple[bytes, str]] = {}
        self.writes: List[str] = []
        self.exists_calls: List[Tuple[str, Optional[str]]] = []
        self.deleted: List[str] = []
        self.exists_errors = 0
        self.fail_deletes = False
        self.fail_presign = False
        self._pending: Dict[str, int] = {}
        self._signatures = 0
    
    @property
    def bucket(self) -> str:
        return self._bucket
    
    def put(self, key: str, content: bytes, content_type: str = "application/octet-stream") -> None:
        """Seed an object without recording a pipeline write."""
        self.objects[key] = (content, content_type)
    
    async def write(self, key: str, content: bytes, content_type: str) -> None:
        self.objects[key] = (content, content_type)
        self.writes.append(key)
        if self.lag:
            self._pending[key] = self.lag
    
    async def read(self, key: str) -> bytes:
        if key not in self.objects:
            raise FileNotFound(message=f"File not found: /{key}", path=f"/{key}", bucket=self._bucket)
        return self.objects[key][0]
    
    async def exists(self, key: str, bucket: Optional[str] = None) -> bool:
        self.exists_calls.append((key, bucket))
        if self.exists_errors:
            self.exists_errors -= 1
            raise ConnectionError("store unreachable")
        if self._pending.get(key):
            self._pending[key] -= 1
            return False
        return key in self.objects
    
    async def stat(self, key: str) -> ObjectStat:
        if key not in self.objects:
            raise FileNotFound(message=f"File not found: /{key}", path=f"/{key}", bucket=self._bucket)
        content, content_type = self.objects[key]
        return ObjectStat(size=len(content), content_type=content_type)
    
    async def size(self, key: str) -> int:
        return (await self.stat(key)).size
    
    async def delete(self, key: str) -> bool:
        if self.fail_deletes:
            raise ConnectionError("store unreachable")
        self.objects.pop(key, None)
        self.deleted.append(key)
        return True
    
    async def presigned_url(self, key: str, ttl: int, bucket: Optional[str] = None) -> str:
        if self.fail_presign:
            raise RuntimeError("signing backend down")
        self._signatures += 1
        return (
            f"http://minio.test:9000/{bucket or self._bucket}/{key}"
            f"?X-Amz-Expires={ttl}&X-Amz-Signature=sig{self._signatures:04d}"
        )


class FakeMimeDetector:
    """Magic-number sniffer covering the formats used in tests.
    
    Mirrors libmagic's answer for empty input (``application/x-empty``).
    """
    
    def detect(self, content: bytes) -> Optional[str]:
        if not content:
            return "application/x-empty"
        if content.startswith(b"\x89PNG"):
            return "image/png"
        if content.startswith(b"\xff\xd8\xff"):
            return "image/jpeg"
        if content.startswith(b"GIF8"):
            return "image/gif"
        if content.startswith(b"RIFF") and content[8:12] == b"WEBP":
            return "image/webp"
        if content.startswith(b"%PDF"):
            return "application/pdf"
        if content[4:8] == b"ftyp":
            return "video/mp4"
        if content.startswith(b"MZ"):
            return "application/x-dosexec"
        try:
            content.decode("utf-8")
        except UnicodeDecodeError:
            return "application/octet-stream"
        return "text/plain"


class FakeVideoProcessor:
    """Video processor fake writing canned bytes instead of running ffmpeg."""
    
    def __init__(self, available: bool = True, output: bytes = b"\x00\x00\x00\x18ftypisomtranscoded"):
        self.available = available
        self.output = output
        self.transcode_calls: List[Tuple[Path, Path, object]] = []
        self.capture_calls: List[Tuple[Path, Path, object]] = []
        self.probe_calls: List[Path] = []
        self.transcode_error: Optional[Exception] = None
        self.probe_result = {"duration": 12.5, "video": {"width": 1280, "height": 720}}
    
    def is_available(self) -> bool:
        return self.available
    
    async def transcode(self, input_path: Path, output_path: Path, options) -> dict:
        self.transcode_calls.append((input_path, output_path, options))
        if self.transcode_error is not None:
            raise self.transcode_error
        output_path.write_bytes(self.output)
        return {"format": options.format, "final_size": len(self.output)}
    
    async def capture_frame(self, input_path: Path, output_path: Path, options) -> None:
        self.capture_calls.append((input_path, output_path, options))
        output_path.write_bytes(make_image("JPEG", (options.width, options.height)))
    
    async def probe(self, path: Path) -> dict:
        self.probe_calls.append(path)
        return self.probe_result


def make_image(
    image_format: str = "PNG",
    size: Tuple[int, int] = (400, 300),
    color=(200, 30, 30),
    mode: str = "RGB"
) -> bytes:
    """Encode a solid-color image."""
    if mode == "RGBA" and len(color) == 3:
        color = (*color, 128)
    buffer = BytesIO()
    Image.new(mode, size, color).save(buffer, format=image_format)
    return buffer.getvalue()


def open_image(content: bytes) -> Image.Image:
    image = Image.open(BytesIO(content))
    image.load()
    return image


async def no_sleep(seconds: float) -> None:
    return None


FAKE_MP4 = b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 64


@pytest.fixture
def settings():
    """Storage settings isolated from the environment and .env files."""
    return StorageSettings(
        _env_file=None,
        endpoint="http://minio.test:9000",
        bucket="media",
    )


@pytest.fixture
def object_store():
    return InMemoryObjectStore(bucket="media")


@pytest.fixture
def mime_detector():
    return FakeMimeDetector()


@pytest.fixture
def video_processor():
    return FakeVideoProcessor(available=False)


@pytest.fixture
def image_processor():
    return PillowImageProcessor()


@pytest.fixture
def storage_service(settings, object_store, mime_detector, image_processor, video_processor):
    """Fully wired service over the in-memory store."""
    return create_storage_service(
        settings=settings,
        object_store=object_store,
        mime_detector=mime_detector,
        image_processor=image_processor,
        video_processor=video_processor,
        sleep=no_sleep,
    )


@pytest.fixture
def png_bytes():
    return make_image("PNG", (400, 300))


@pytest.fixture
def jpeg_bytes():
    return make_image("JPEG", (400, 300))
