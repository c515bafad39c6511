"""Validators for the upload pipeline."""

from .file_type_validator import FileTypeValidator, ValidationResult

__all__ = ["FileTypeValidator", "ValidationResult"]
