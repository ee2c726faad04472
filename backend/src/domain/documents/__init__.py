"""Documents domain module - validation of uploaded BOQ files"""

from .validation import (
    is_supported_file,
    validate_file_size,
    validate_filename,
    sanitize_filename,
    SUPPORTED_MIME_TYPES,
    SUPPORTED_EXTENSIONS,
    DEFAULT_MAX_FILE_SIZE,
)

__all__ = [
    "is_supported_file",
    "validate_file_size",
    "validate_filename",
    "sanitize_filename",
    "SUPPORTED_MIME_TYPES",
    "SUPPORTED_EXTENSIONS",
    "DEFAULT_MAX_FILE_SIZE",
]
