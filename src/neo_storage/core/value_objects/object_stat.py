"""Object stat value object.

ONLY object stat - size, content type and modification time reported by
the object store for a single key.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ObjectStat:
    size: int
    content_type: Optional[str] = None
    last_modified: Optional[datetime] = None
