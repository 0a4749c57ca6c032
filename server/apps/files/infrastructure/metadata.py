"""Metadata and input parsing utilities for files."""

import base64
import binascii
import mimetypes
import uuid
from typing import Final

from server.apps.files.exceptions import RequestValidationError

_DEFAULT_MIME_TYPE: Final = 'application/octet-stream'

# Client-side spellings of the root parent
_ROOT_SENTINELS: Final = frozenset((0, '0'))


def detect_mime_type(filename: str) -> str:
    """Detect MIME type from file name.

    Uses Python's built-in mimetypes module to guess MIME type
    from the filename extension. Stored bytes are never inspected.

    Args:
        filename: Filename with extension.

    Returns:
        MIME type string (e.g., 'image/png', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return _DEFAULT_MIME_TYPE
    return mime_type


def decode_content(data: object) -> bytes:
    """Decode base64 upload payload.

    Whitespace (line wrapping) is ignored, any other character outside
    the base64 alphabet is rejected.

    Args:
        data: Base64 string sent by the client.

    Returns:
        Decoded bytes.

    Raises:
        RequestValidationError: If data is not valid base64.
    """
    if not isinstance(data, str):
        raise RequestValidationError('Invalid data')

    compact = ''.join(data.split())
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as error:
        raise RequestValidationError('Invalid data') from error


def parse_identifier(raw_id: object, error_message: str) -> uuid.UUID:
    """Convert an external identifier string into a UUID.

    Args:
        raw_id: Identifier as received from the client.
        error_message: Message of the error raised on malformed input.

    Returns:
        Parsed UUID.

    Raises:
        RequestValidationError: If raw_id is not a valid UUID.
    """
    if isinstance(raw_id, uuid.UUID):
        return raw_id
    if not isinstance(raw_id, str):
        raise RequestValidationError(error_message)
    try:
        return uuid.UUID(raw_id)
    except ValueError as error:
        raise RequestValidationError(error_message) from error


def _is_root(raw_parent_id: object) -> bool:
    """Check whether a client parentId designates the root."""
    if raw_parent_id is None:
        return True
    # bool is an int subclass: False must not read as 0
    if isinstance(raw_parent_id, bool):
        return False
    if not isinstance(raw_parent_id, (int, str)):
        return False
    return raw_parent_id in _ROOT_SENTINELS


def parse_parent_id(
    raw_parent_id: object,
    error_message: str,
) -> uuid.UUID | None:
    """Convert a client parentId into a UUID, or None for the root.

    Args:
        raw_parent_id: ``0``, ``'0'``, None or a record identifier.
        error_message: Message of the error raised on malformed input.

    Returns:
        Parent UUID, or None when the root sentinel was given.

    Raises:
        RequestValidationError: If raw_parent_id is malformed.
    """
    if _is_root(raw_parent_id):
        return None
    return parse_identifier(raw_parent_id, error_message)


def parse_page(raw_page: object) -> int:
    """Convert a page query parameter into a non-negative integer.

    Args:
        raw_page: Page number as string or int, None for the first page.

    Returns:
        Page number (0-based).

    Raises:
        RequestValidationError: If raw_page is not a non-negative integer.
    """
    if raw_page is None:
        return 0
    if isinstance(raw_page, bool):
        raise RequestValidationError('Invalid page')
    try:
        page = int(raw_page)  # type: ignore[call-overload]
    except (TypeError, ValueError) as error:
        raise RequestValidationError('Invalid page') from error
    if page < 0:
        raise RequestValidationError('Invalid page')
    return page

