"""HTTP surface for neo-storage."""

from .dependencies import get_storage_service, get_upload_options
from .routes import create_storage_router

__all__ = ["create_storage_router", "get_storage_service", "get_upload_options"]
