"""Page cursor codec: base64 of the decimal page index.

The format is held by clients between requests; changing it breaks cursors
already handed out, so any new format needs a version marker.
"""

import base64
import binascii

from authsearch.domain.exceptions import InvalidCursorException


def encode_page_cursor(page: int) -> str:
    """Encode a zero-based page index as an opaque cursor.

    Raises:
        ValueError: If page is negative.
    """
    if page < 0:
        raise ValueError(f"page must be >= 0, got {page}")
    return base64.b64encode(str(page).encode("utf-8")).decode("ascii")


def decode_page_cursor(page_cursor: str | None) -> int:
    """Decode a cursor to its page index; absent or empty cursor is page 0.

    Raises:
        InvalidCursorException: If the cursor is not base64 of a non-negative integer.
    """
    if not page_cursor:
        return 0
    try:
        raw = base64.b64decode(page_cursor, validate=True).decode("ascii")
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise InvalidCursorException(page_cursor) from e
    if not raw.isascii() or not raw.isdigit():
        raise InvalidCursorException(page_cursor)
    return int(raw)
