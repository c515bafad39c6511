"""Centralized logging configuration for neo-storage.

Logging is configured once through ``logging.config.dictConfig`` from
``LOG_LEVEL``, ``LOG_VERBOSITY`` (wins when set) and ``LOG_FORMAT``.
Storage SDK, Pillow and retry chatter is held back unless debugging.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict


class LogVerbosity(str, Enum):
    """Verbosity modes accepted in ``LOG_VERBOSITY``."""
    QUIET = "QUIET"      # Only errors and critical
    NORMAL = "NORMAL"    # Warnings and above
    VERBOSE = "VERBOSE"  # Upload lifecycle at info
    DEBUG = "DEBUG"      # Retries, scanner and processor details


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


VERBOSITY_LEVELS: Dict[LogVerbosity, str] = {
    LogVerbosity.QUIET: "ERROR",
    LogVerbosity.NORMAL: "WARNING",
    LogVerbosity.VERBOSE: "INFO",
    LogVerbosity.DEBUG: "DEBUG",
}

FORMAT_STRINGS: Dict[LogFormat, str] = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Map a verbosity mode to a log level; unknown modes mean NORMAL."""
    try:
        return VERBOSITY_LEVELS[LogVerbosity(verbosity.upper())]
    except ValueError:
        return VERBOSITY_LEVELS[LogVerbosity.NORMAL]


def _module_logger(level: str) -> Dict[str, Any]:
    return {"level": level, "handlers": ["console"], "propagate": False}


class LoggingConfig:
    """Centralized logging configuration manager."""
    
    # Pipeline internals that are chatty at INFO
    DEFAULT_QUIET_MODULES = [
        "neo_storage.utils.retry",
        "neo_storage.infrastructure.processors",
    ]
    
    # Third-party modules that should only log errors
    ERROR_ONLY_MODULES = [
        "botocore",
        "aiobotocore",
        "aioboto3",
        "PIL",
        "urllib3",
        "asyncio",
    ]
    
    @staticmethod
    def effective_level() -> str:
        verbosity = os.getenv("LOG_VERBOSITY")
        if verbosity:
            return get_log_level_from_verbosity(verbosity)
        return os.getenv("LOG_LEVEL", "INFO").upper()
    
    @staticmethod
    def format_string() -> str:
        try:
            return FORMAT_STRINGS[LogFormat(os.getenv("LOG_FORMAT", LogFormat.SIMPLE.value).lower())]
        except ValueError:
            return FORMAT_STRINGS[LogFormat.SIMPLE]
    
    @classmethod
    def build_config(cls) -> Dict[str, Any]:
        """Build the ``dictConfig`` mapping from environment variables."""
        level = cls.effective_level()
        quiet_level = "DEBUG" if level == "DEBUG" else "WARNING"
        
        loggers = {module: _module_logger(quiet_level) for module in cls.DEFAULT_QUIET_MODULES}
        loggers.update({module: _module_logger("ERROR") for module in cls.ERROR_ONLY_MODULES})
        
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": cls.format_string(), "datefmt": "%Y-%m-%d %H:%M:%S"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"level": level, "handlers": ["console"]},
            "loggers": loggers,
        }
    
    @classmethod
    def configure(cls) -> None:
        logging_config = cls.build_config()
        logging.config.dictConfig(logging_config)
        logging.getLogger(__name__).debug(f"Logging configured: level={logging_config['root']['level']}")


def setup_logging() -> None:
    """Configure logging from the environment; called on package import."""
    LoggingConfig.configure()


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name (usually ``__name__``)."""
    return logging.getLogger(name)
