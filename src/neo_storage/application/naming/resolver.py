"""Naming strategy resolver.

ONLY naming resolution - maps a strategy tag or object to a strategy,
once per upload.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from enum import Enum
from typing import Any, Union

from ...core.protocols.naming_strategy import NamingStrategy
from .hash_namer import HashNamer
from .original_namer import OriginalNamer
from .slug_namer import SlugNamer

logger = logging.getLogger(__name__)


class NamingStrategyType(str, Enum):
    """Built-in naming strategies."""
    HASH = "hash"
    SLUG = "slug"
    ORIGINAL = "original"


def create_naming_strategy(strategy_type: NamingStrategyType) -> NamingStrategy:
    if strategy_type is NamingStrategyType.HASH:
        return HashNamer()
    if strategy_type is NamingStrategyType.SLUG:
        return SlugNamer()
    return OriginalNamer()


def resolve_naming_strategy(naming: Union[str, NamingStrategy, Any, None]) -> NamingStrategy:
    """Resolve a naming option into a strategy.
    
    Strategy objects are used as-is. Unknown tags fall back to ``original``.
    
    Args:
        naming: Strategy tag, enum member or object with ``generate``
        
    Returns:
        Naming strategy instance
    """
    if naming is not None and not isinstance(naming, str) and callable(getattr(naming, "generate", None)):
        return naming
    
    try:
        strategy_type = NamingStrategyType(str(getattr(naming, "value", naming)).lower())
    except ValueError:
        logger.debug(f"Unknown naming strategy {naming!r}, using original")
        strategy_type = NamingStrategyType.ORIGINAL
    
    return create_naming_strategy(strategy_type)
