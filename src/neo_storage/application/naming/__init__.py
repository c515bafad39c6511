"""Naming strategies for stored objects."""

from .hash_namer import HashNamer
from .slug_namer import SlugNamer
from .original_namer import OriginalNamer
from .resolver import NamingStrategyType, create_naming_strategy, resolve_naming_strategy

__all__ = [
    "HashNamer",
    "SlugNamer",
    "OriginalNamer",
    "NamingStrategyType",
    "create_naming_strategy",
    "resolve_naming_strategy",
]
