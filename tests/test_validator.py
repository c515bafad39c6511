"""File type validator tests."""

import pytest

from neo_storage.application.validators import FileTypeValidator
from neo_storage.config.settings import DEFAULT_ALLOWED_TYPES
from neo_storage.core.exceptions import UnsupportedFileType


class TestFileTypeValidator:
    
    @pytest.fixture
    def validator(self):
        return FileTypeValidator()
    
    def test_allowed_extension(self, validator):
        result = validator.check("PNG", "image/png", DEFAULT_ALLOWED_TYPES)
        
        assert result.valid is True
        assert result.details["extension"] == "png"
    
    def test_disallowed_extension(self, validator):
        result = validator.check("exe", "application/x-dosexec", DEFAULT_ALLOWED_TYPES)
        
        assert result.valid is False
        assert "exe" in result.reason
    
    def test_validate_raises(self, validator):
        with pytest.raises(UnsupportedFileType) as exc_info:
            validator.validate(".php", "text/x-php", {"images": ["png"]})
        
        assert exc_info.value.extension == "php"
        assert exc_info.value.allowed_extensions == ["png"]
    
    def test_empty_allow_list_allows_everything(self, validator):
        validator.validate("anything", None, {})
        validator.validate("anything", None, None)
    
    def test_allowed_extensions_union(self):
        allowed = FileTypeValidator.allowed_extensions({"a": ["JPG", ".png"], "b": ["txt"]})
        
        assert allowed == {"jpg", "png", "txt"}
