"""Metadata helpers for file records."""

import mimetypes
from typing import Final

from django.core.exceptions import ValidationError

_PATH_SEPARATOR: Final = '/'
_FALLBACK_MIME_TYPE: Final = 'application/octet-stream'
_NAME_MAX_LENGTH: Final = 255


def detect_mime_type(filename: str) -> str:
    """Detect MIME type from filename.

    Uses Python's built-in mimetypes module to guess MIME type
    from filename extension. No bytes are stored, so content
    sniffing is not possible.

    Args:
        filename: Filename with extension.

    Returns:
        MIME type string (e.g., 'image/jpeg', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return _FALLBACK_MIME_TYPE
    return mime_type


def build_display_path(parent_path: str | None, name: str) -> str:
    """Build the denormalized display path for an entry.

    Example: ('/Financial Reports', 'Q4.pdf') -> '/Financial Reports/Q4.pdf'

    Args:
        parent_path: Display path of the parent folder, None for root.
        name: Entry name.

    Returns:
        Display path with a leading separator.
    """
    parent = (parent_path or '').rstrip(_PATH_SEPARATOR)
    return f'{parent}{_PATH_SEPARATOR}{name}'


def validate_file_name(name: str) -> None:
    """Validate a file or folder name.

    Args:
        name: Proposed name.

    Raises:
        ValidationError: If name is blank, too long or contains '/'.
    """
    if not name.strip():
        raise ValidationError('Name cannot be empty', code='blank')

    if len(name) > _NAME_MAX_LENGTH:
        raise ValidationError(
            f'Name cannot exceed {_NAME_MAX_LENGTH} characters',
            code='max_length',
        )

    if _PATH_SEPARATOR in name:
        raise ValidationError(
            f'Name cannot contain "{_PATH_SEPARATOR}"',
            code='invalid',
        )
