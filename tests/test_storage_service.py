"""Storage service secondary operation tests."""

import pytest

from neo_storage.application.queries.get_file_metadata import VIDEO_TOO_LARGE_NOTE
from neo_storage.config.settings import StorageSettings
from neo_storage.core.exceptions import FileNotFound, UploadFailed
from neo_storage.factory import create_storage_service

from conftest import FAKE_MP4, FakeVideoProcessor, make_image, no_sleep


class TestDelete:
    
    @pytest.mark.asyncio
    async def test_delete(self, storage_service, object_store):
        object_store.put("docs/a.txt", b"a", "text/plain")
        
        assert await storage_service.delete("/docs/a.txt") is True
        assert object_store.deleted == ["docs/a.txt"]
        assert "docs/a.txt" not in object_store.objects
    
    @pytest.mark.asyncio
    async def test_delete_failure_returns_false(self, storage_service, object_store):
        object_store.fail_deletes = True
        
        assert await storage_service.delete("docs/a.txt") is False
    
    @pytest.mark.asyncio
    async def test_file_exists(self, storage_service, object_store):
        object_store.put("docs/a.txt", b"a")
        
        assert await storage_service.file_exists("/docs/a.txt") is True
        assert await storage_service.file_exists("/docs/b.txt") is False


class TestMetadata:
    
    @pytest.mark.asyncio
    async def test_plain_file(self, storage_service, object_store):
        object_store.put("docs/readme.txt", b"hello", "text/plain")
        
        metadata = await storage_service.get_metadata("/docs/readme.txt")
        
        assert metadata == {
            "path": "/docs/readme.txt",
            "file_name": "readme.txt",
            "size": 5,
            "mime_type": "text/plain",
            "last_modified": None,
        }
    
    @pytest.mark.asyncio
    async def test_image_dimensions(self, storage_service, object_store):
        object_store.put("images/a.png", make_image("PNG", (64, 32)), "image/png")
        
        metadata = await storage_service.get_metadata("images/a.png")
        
        assert metadata["width"] == 64
        assert metadata["height"] == 32
        assert metadata["aspect_ratio"] == 2.0
    
    @pytest.mark.asyncio
    async def test_undecodable_image_keeps_base_fields(self, storage_service, object_store):
        object_store.put("images/broken.png", b"not a png", "image/png")
        
        metadata = await storage_service.get_metadata("images/broken.png")
        
        assert metadata["size"] == 9
        assert "width" not in metadata
    
    @pytest.mark.asyncio
    async def test_missing_file(self, storage_service):
        with pytest.raises(FileNotFound) as exc_info:
            await storage_service.get_metadata("/nope.txt")
        
        assert exc_info.value.path == "/nope.txt"
    
    @pytest.mark.asyncio
    async def test_video_without_transcoder(self, storage_service, object_store):
        object_store.put("videos/a.mp4", FAKE_MP4, "video/mp4")
        
        metadata = await storage_service.get_metadata("videos/a.mp4")
        
        assert metadata["video_processing_available"] is False
        assert metadata["note"] == "Install FFmpeg for detailed video metadata"
    
    @pytest.mark.asyncio
    async def test_video_probe(self, settings, object_store, mime_detector, image_processor):
        transcoder = FakeVideoProcessor(available=True)
        service = create_storage_service(
            settings=settings,
            object_store=object_store,
            mime_detector=mime_detector,
            image_processor=image_processor,
            video_processor=transcoder,
            sleep=no_sleep,
        )
        object_store.put("videos/a.mp4", FAKE_MP4, "video/mp4")
        
        metadata = await service.get_metadata("videos/a.mp4")
        
        assert metadata["size"] == len(FAKE_MP4)
        assert metadata["video_processing_available"] is True
        assert metadata["video_info"] == transcoder.probe_result
        assert transcoder.probe_calls[0].name == "probe.mp4"
        assert not transcoder.probe_calls[0].exists()
    
    @pytest.mark.asyncio
    async def test_video_over_probe_limit(self, object_store, mime_detector, image_processor):
        transcoder = FakeVideoProcessor(available=True)
        service = create_storage_service(
            settings=StorageSettings(_env_file=None, bucket="media", metadata_probe_max_size=10),
            object_store=object_store,
            mime_detector=mime_detector,
            image_processor=image_processor,
            video_processor=transcoder,
            sleep=no_sleep,
        )
        object_store.put("videos/a.mp4", FAKE_MP4, "video/mp4")
        
        metadata = await service.get_metadata("videos/a.mp4")
        
        assert metadata["note"] == VIDEO_TOO_LARGE_NOTE
        assert transcoder.probe_calls == []


class TestUrls:
    
    @pytest.mark.asyncio
    async def test_signed_url_expiration_capped(self, storage_service):
        url = await storage_service.get_url("/docs/a.txt", expiration=10_000_000, signed=True)
        
        assert "X-Amz-Expires=604800" in url
    
    @pytest.mark.asyncio
    async def test_signed_url_default_expiration(self, storage_service):
        url = await storage_service.get_url("docs/a.txt", signed=True)
        
        assert url.startswith("http://minio.test:9000/media/docs/a.txt?")
        assert "X-Amz-Expires=3600" in url
    
    @pytest.mark.asyncio
    async def test_presign_failure_wrapped(self, storage_service, object_store):
        object_store.fail_presign = True
        
        with pytest.raises(UploadFailed) as exc_info:
            await storage_service.get_url("docs/a.txt", signed=True)
        
        assert exc_info.value.upload_stage == "url"
        assert isinstance(exc_info.value.cause, RuntimeError)
    
    @pytest.mark.asyncio
    async def test_unsigned_url_requires_object(self, storage_service):
        with pytest.raises(FileNotFound):
            await storage_service.get_url("docs/a.txt")
    
    @pytest.mark.asyncio
    async def test_unsigned_url(self, storage_service, object_store):
        object_store.put("docs/a.txt", b"a")
        
        assert await storage_service.get_url("/docs/a.txt") == "http://minio.test:9000/media/docs/a.txt"
    
    def test_public_url_is_quoted(self, storage_service):
        assert storage_service.get_public_url("/docs/a b.txt") == "http://minio.test:9000/media/docs/a%20b.txt"
    
    @pytest.mark.asyncio
    async def test_public_url_without_check(self, storage_service, object_store):
        url = await storage_service.get_url_public("docs/a.txt", check_exists=False)
        
        assert url == "http://minio.test:9000/media/docs/a.txt"
        assert object_store.exists_calls == []
    
    @pytest.mark.asyncio
    async def test_public_url_bucket_override(self, storage_service, object_store):
        object_store.put("docs/a.txt", b"a")
        
        url = await storage_service.get_url_public("docs/a.txt", bucket="archive")
        
        assert url == "http://minio.test:9000/archive/docs/a.txt"
        assert object_store.exists_calls[0] == ("docs/a.txt", "archive")
