"""File type validator.

ONLY file type validation - checks the resolved extension against the
allowed-extensions-by-category table before any expensive work.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Dict, Iterable, Optional, Set

from ...core.exceptions.unsupported_file_type import UnsupportedFileType


class ValidationResult:
    """File type validation result."""
    
    def __init__(self, valid: bool, reason: Optional[str] = None, details: Optional[Dict] = None):
        self.valid = valid
        self.reason = reason
        self.details = details or {}


class FileTypeValidator:
    """Extension allow-list validation.
    
    The allow-list is the union of every category's extensions. An empty
    union means no restriction.
    """
    
    @staticmethod
    def allowed_extensions(allowed_types: Optional[Dict[str, Iterable[str]]]) -> Set[str]:
        """Union of all allowed extensions across categories, lower-cased."""
        allowed: Set[str] = set()
        for extensions in (allowed_types or {}).values():
            allowed.update(ext.lower().lstrip('.') for ext in extensions)
        return allowed
    
    def check(
        self,
        extension: str,
        mime_type: Optional[str],
        allowed_types: Optional[Dict[str, Iterable[str]]]
    ) -> ValidationResult:
        """Check an extension without raising.
        
        Args:
            extension: Resolved extension, with or without the dot
            mime_type: Detected MIME type, reported in the result details
            allowed_types: Allowed extensions keyed by category
            
        Returns:
            ValidationResult with validation status and details
        """
        allowed = self.allowed_extensions(allowed_types)
        normalized = extension.lower().lstrip('.')
        
        if allowed and normalized not in allowed:
            return ValidationResult(
                valid=False,
                reason=f"File type '{normalized}' is not allowed",
                details={"extension": normalized, "mime_type": mime_type, "allowed_extensions": allowed},
            )
        
        return ValidationResult(valid=True, details={"extension": normalized, "mime_type": mime_type})
    
    def validate(
        self,
        extension: str,
        mime_type: Optional[str],
        allowed_types: Optional[Dict[str, Iterable[str]]]
    ) -> None:
        """Validate an extension.
        
        Raises:
            UnsupportedFileType: If the allow-list is non-empty and lacks the extension
        """
        result = self.check(extension, mime_type, allowed_types)
        if not result.valid:
            raise UnsupportedFileType(
                message=result.reason or "File type is not allowed",
                extension=result.details["extension"],
                mime_type=mime_type,
                allowed_extensions=list(result.details["allowed_extensions"]),
            )
