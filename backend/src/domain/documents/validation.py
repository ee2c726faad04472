"""File validation utilities for BOQ uploads"""

import os
import re
from typing import Optional, Tuple


# Supported MIME types
SUPPORTED_MIME_TYPES = {
    'application/pdf',
    'application/vnd.ms-excel',  # .xls
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',  # .xlsx
    'text/plain',
}

# Browsers frequently send application/octet-stream for spreadsheets
SUPPORTED_EXTENSIONS = ('.pdf', '.xls', '.xlsx', '.txt')

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024


def is_supported_file(mime_type: Optional[str], filename: Optional[str] = None) -> bool:
    """Check if an upload is a supported BOQ file

    Args:
        mime_type: MIME type string (e.g., 'application/pdf')
        filename: Original filename, checked by extension

    Returns:
        True if either the MIME type or the extension is supported

    Example:
        >>> is_supported_file('application/pdf')
        True
        >>> is_supported_file('application/octet-stream', 'boq.xlsx')
        True
        >>> is_supported_file('image/png', 'scan.png')
        False
    """
    if mime_type in SUPPORTED_MIME_TYPES:
        return True
    return bool(filename) and filename.lower().endswith(SUPPORTED_EXTENSIONS)


def validate_file_size(size_bytes: int, max_size: int = DEFAULT_MAX_FILE_SIZE) -> Tuple[bool, Optional[str]]:
    """Validate file size is within limits

    Args:
        size_bytes: File size in bytes
        max_size: Maximum allowed size

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> validate_file_size(1024)
        (True, None)
        >>> validate_file_size(0)
        (False, 'File is empty (0 bytes)')
    """
    if size_bytes == 0:
        return False, "File is empty (0 bytes)"

    if size_bytes > max_size:
        return False, f"File exceeds maximum size of {max_size} bytes (got {size_bytes} bytes)"

    return True, None


def validate_filename(filename: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate an uploaded filename

    Validation rules:
    - Not empty
    - Max 255 characters
    - No null bytes or control characters

    Directory components are stripped by sanitize_filename rather than rejected.

    Example:
        >>> validate_filename('boq.xlsx')
        (True, None)
        >>> validate_filename('')
        (False, 'Filename cannot be empty')
    """
    if not filename or len(filename.strip()) == 0:
        return False, "Filename cannot be empty"

    if len(filename) > 255:
        return False, f"Filename exceeds 255 characters (got {len(filename)})"

    if '\x00' in filename:
        return False, "Filename contains null bytes"

    if any(ord(c) < 32 for c in filename):
        return False, "Filename contains control characters"

    return True, None


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for logging and responses

    Example:
        >>> sanitize_filename('../../boq.pdf')
        'boq.pdf'
        >>> sanitize_filename('site boq (rev 2).xlsx')
        'site_boq_rev_2_.xlsx'
    """
    # Remove path components (both separators, uploads come from any OS)
    filename = os.path.basename(filename.replace('\\', '/'))

    # Replace problematic characters with underscore
    filename = re.sub(r'[^\w\s.-]', '_', filename)

    # Collapse multiple spaces/underscores
    filename = re.sub(r'[\s_]+', '_', filename)

    if len(filename) > 255:
        name, ext = os.path.splitext(filename)
        filename = name[:255 - len(ext)] + ext

    return filename
