"""Upload result entities.

ONLY upload result - per-artifact records and the role-keyed mapping
returned by an upload call.

Following maximum separation architecture - one file = one purpose.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

MAIN = "main"
THUMBNAIL = "thumbnail"
WARNINGS = "warnings"


@dataclass
class ArtifactRecord:
    """One stored object produced by an upload call."""
    
    path: str
    url: Optional[str]
    size: int
    mime_type: str
    original_name: str
    file_name: str
    processing: Optional[Dict[str, Any]] = None
    
    def to_dict(self) -> Dict[str, Any]:
        data = {
            "path": self.path,
            "url": self.url,
            "size": self.size,
            "mime_type": self.mime_type,
            "original_name": self.original_name,
            "file_name": self.file_name,
        }
        if self.processing is not None:
            data["processing"] = self.processing
        return data


@dataclass
class UploadResult(Mapping):
    """Mapping from artifact role (``main``, ``thumbnail``) to its record.
    
    ``result["warnings"]`` is present only when a degraded step recorded one.
    """
    
    artifacts: Dict[str, ArtifactRecord] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    
    def add(self, role: str, record: ArtifactRecord) -> None:
        self.artifacts[role] = record
    
    def warn(self, message: str) -> None:
        self.warnings.append(message)
    
    @property
    def main(self) -> Optional[ArtifactRecord]:
        return self.artifacts.get(MAIN)
    
    @property
    def thumbnail(self) -> Optional[ArtifactRecord]:
        return self.artifacts.get(THUMBNAIL)
    
    def _keys(self) -> List[str]:
        keys = list(self.artifacts)
        if self.warnings:
            keys.append(WARNINGS)
        return keys
    
    def __getitem__(self, key: str) -> Any:
        if key == WARNINGS and self.warnings:
            return self.warnings
        return self.artifacts[key]
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._keys())
    
    def __len__(self) -> int:
        return len(self._keys())
    
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {role: record.to_dict() for role, record in self.artifacts.items()}
        if self.warnings:
            data[WARNINGS] = list(self.warnings)
        return data
