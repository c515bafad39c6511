"""Storage settings tests."""

import pytest

from neo_storage.config.settings import StorageSettings, get_settings


class TestStorageSettings:
    
    def test_defaults(self):
        settings = StorageSettings(_env_file=None)
        
        assert settings.bucket == "uploads"
        assert settings.url.signed_by_default is False
        assert settings.url.max_expiration == 604800
        assert settings.default_options.naming == "hash"
        assert settings.thumbnail.width == 200
        assert "png" in settings.allowed_types["images"]
    
    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MINIO_BUCKET", "assets")
        monkeypatch.setenv("MINIO_URL__SIGNED_BY_DEFAULT", "true")
        monkeypatch.setenv("MINIO_SECURITY__SCAN_IMAGES", "false")
        monkeypatch.setenv("MINIO_DEFAULT_OPTIONS__NAMING", "slug")
        
        settings = StorageSettings(_env_file=None)
        
        assert settings.bucket == "assets"
        assert settings.url.signed_by_default is True
        assert settings.security.scan_images is False
        assert settings.default_options.naming == "slug"
    
    def test_public_endpoint(self):
        settings = StorageSettings(_env_file=None, endpoint="http://minio:9000", public_endpoint="https://cdn.example.com/")
        
        assert settings.url_endpoint == "https://cdn.example.com"
    
    def test_secrets_hidden(self):
        settings = StorageSettings(_env_file=None, secret_key="s3cr3t")
        
        assert "s3cr3t" not in repr(settings)
        assert settings.secret_key.get_secret_value() == "s3cr3t"
    
    def test_get_settings_cached(self):
        get_settings.cache_clear()
        
        assert get_settings() is get_settings()
        get_settings.cache_clear()
