"""
Input Validators - Sanitization and validation utilities.

Validators return (is_valid, sanitized_value, error_message) tuples so the
route layer decides which exception to raise.
"""
from typing import Optional, Tuple

from thoughtlog.core.constants import (
    CATEGORY_PALETTE,
    MAX_CATEGORY_NAME_LENGTH,
    MAX_CONTENT_LENGTH,
    MAX_DESCRIPTION_LENGTH,
)
from thoughtlog.core.logging_config import get_logger

logger = get_logger(__name__)


def sanitize_text(text: Optional[str], max_length: int = MAX_CONTENT_LENGTH) -> str:
    """
    Sanitize free text.

    - Removes null bytes
    - Strips leading/trailing whitespace
    - Limits length

    Inner whitespace and line breaks are kept; journal entries rely on them.
    """
    if not text:
        return ""

    cleaned = text.replace("\x00", "").strip()

    if len(cleaned) > max_length:
        logger.debug(f"Truncating text from {len(cleaned)} to {max_length} characters")
        cleaned = cleaned[:max_length]

    return cleaned


def validate_content(content: Optional[str]) -> Tuple[bool, str, Optional[str]]:
    """
    Full validation and sanitization of an entry's content.

    Args:
        content: Raw content from the request body

    Returns:
        Tuple of (is_valid, sanitized_content, error_message)
    """
    if content is None or not content.strip():
        return False, "", "Content is required"

    sanitized = sanitize_text(content)
    if not sanitized:
        return False, "", "Content cannot be empty after sanitization"

    return True, sanitized, None


def validate_category_name(name: Optional[str]) -> Tuple[bool, str, Optional[str]]:
    """Validate a user-supplied category name."""
    if name is None or not name.strip():
        return False, "", "Category name is required"

    sanitized = name.replace("\x00", "").strip()
    if len(sanitized) > MAX_CATEGORY_NAME_LENGTH:
        return False, "", f"Category name too long (max {MAX_CATEGORY_NAME_LENGTH} characters)"

    return True, sanitized, None


def validate_description(description: Optional[str]) -> Tuple[bool, Optional[str], Optional[str]]:
    """Validate an optional category description; blank becomes None."""
    if description is None or not description.strip():
        return True, None, None

    sanitized = description.replace("\x00", "").strip()
    if len(sanitized) > MAX_DESCRIPTION_LENGTH:
        return False, None, f"Description too long (max {MAX_DESCRIPTION_LENGTH} characters)"

    return True, sanitized, None


def validate_color(color: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a category color against the fixed palette.

    Comparison is case-insensitive; the palette spelling is canonical.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if color.upper() not in CATEGORY_PALETTE:
        return False, f"Invalid color: {color}. Must be one of: {', '.join(CATEGORY_PALETTE)}"

    return True, None
