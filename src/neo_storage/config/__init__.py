"""Configuration module for neo-storage."""

from .settings import (
    StorageSettings,
    TranscoderSettings,
    SecuritySettings,
    UrlSettings,
    ExistenceCheckSettings,
    DEFAULT_ALLOWED_TYPES,
    get_settings,
)
from .logging_config import (
    setup_logging,
    get_logger,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

__all__ = [
    # Settings
    "StorageSettings",
    "TranscoderSettings",
    "SecuritySettings",
    "UrlSettings",
    "ExistenceCheckSettings",
    "DEFAULT_ALLOWED_TYPES",
    "get_settings",
    
    # Logging
    "setup_logging",
    "get_logger",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
]
