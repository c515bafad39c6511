"""Storage key value object.

ONLY storage key - represents an object-store key with normalization,
path manipulation, and security checks.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StorageKey:
    """Storage key value object.
    
    Keys are kept without a leading slash internally and are reported
    with exactly one leading slash externally (see ``external``).
    
    Features:
    - Path normalization (backslashes, duplicate and leading slashes)
    - Security validation (prevents directory traversal)
    - Directory, stem and extension extraction
    - Counter suffixes for uniqueness resolution
    """
    
    value: str
    
    # Key validation constants
    MAX_KEY_LENGTH = 1024
    MAX_SEGMENT_LENGTH = 255
    FORBIDDEN_CHARS = {'\0', '\r', '\n'}
    
    def __post_init__(self):
        """Validate and normalize storage key."""
        if not isinstance(self.value, str):
            raise ValueError(f"StorageKey must be a string, got {type(self.value).__name__}")
        
        normalized = self.normalize(self.value)
        if not normalized:
            raise ValueError("Storage key cannot be empty")
        
        self._validate_security(normalized)
        self._validate_length(normalized)
        self._validate_characters(normalized)
        
        object.__setattr__(self, 'value', normalized)
    
    @staticmethod
    def normalize(key: str) -> str:
        """Normalize a raw path into key form (no leading or trailing slash)."""
        normalized = key.strip().replace('\\', '/')
        
        while '//' in normalized:
            normalized = normalized.replace('//', '/')
        
        return normalized.strip('/')
    
    def _validate_security(self, key: str) -> None:
        """Check for path traversal."""
        if '..' in key.split('/'):
            raise ValueError("Storage key contains path traversal sequence: '..'")
    
    def _validate_length(self, key: str) -> None:
        """Validate key and segment lengths."""
        if len(key) > self.MAX_KEY_LENGTH:
            raise ValueError(f"Storage key too long: {len(key)} > {self.MAX_KEY_LENGTH}")
        
        for segment in key.split('/'):
            if len(segment) > self.MAX_SEGMENT_LENGTH:
                raise ValueError(f"Key segment too long: '{segment}' ({len(segment)} > {self.MAX_SEGMENT_LENGTH})")
    
    def _validate_characters(self, key: str) -> None:
        """Validate allowed characters in key."""
        forbidden_found = self.FORBIDDEN_CHARS.intersection(set(key))
        if forbidden_found:
            raise ValueError(f"Storage key contains forbidden characters: {sorted(map(repr, forbidden_found))}")
    
    @classmethod
    def from_components(cls, *components: Optional[str]) -> 'StorageKey':
        """Create storage key from path components, skipping empty ones."""
        valid_components = [cls.normalize(str(comp)) for comp in components if comp]
        valid_components = [comp for comp in valid_components if comp]
        if not valid_components:
            raise ValueError("No valid components provided")
        
        return cls('/'.join(valid_components))
    
    @property
    def external(self) -> str:
        """Key as reported to callers, with exactly one leading slash."""
        return '/' + self.value
    
    @property
    def name(self) -> str:
        """File name (last segment)."""
        return self.value.rsplit('/', 1)[-1]
    
    @property
    def directory(self) -> str:
        """Directory part of the key, empty for top-level keys."""
        if '/' not in self.value:
            return ""
        return self.value.rsplit('/', 1)[0]
    
    @property
    def extension(self) -> str:
        """Extension without the dot, empty when the name has none."""
        name = self.name
        if '.' not in name.lstrip('.'):
            return ""
        return name.rsplit('.', 1)[-1]
    
    @property
    def stem(self) -> str:
        """File name without its extension."""
        if not self.extension:
            return self.name
        return self.name[:-(len(self.extension) + 1)]
    
    def join(self, *components: str) -> 'StorageKey':
        """Join additional components onto this key."""
        return StorageKey.from_components(self.value, *components)
    
    def with_name(self, name: str) -> 'StorageKey':
        """Return a key in the same directory with a different file name."""
        return StorageKey.from_components(self.directory, name)
    
    def with_extension(self, extension: str) -> 'StorageKey':
        """Return a key with the extension replaced (or added)."""
        extension = extension.lstrip('.')
        name = f"{self.stem}.{extension}" if extension else self.stem
        return self.with_name(name)
    
    def with_counter(self, counter: int) -> 'StorageKey':
        """Return the ``stem_<counter>.ext`` variant used for uniqueness resolution."""
        name = f"{self.stem}_{counter}"
        if self.extension:
            name = f"{name}.{self.extension}"
        return self.with_name(name)
    
    def __str__(self) -> str:
        return self.value
    
    def __repr__(self) -> str:
        return f"StorageKey('{self.value}')"
