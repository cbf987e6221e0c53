"""Field validators for the recipient details form.

Each validator takes the raw text of a field and returns an error message,
or None when the value is acceptable. Validators never raise.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

__all__ = [
    "Validator",
    "UK_POSTCODE_PATTERN",
    "MIN_NAME_LENGTH",
    "FIRST_NAME_BLANK",
    "LAST_NAME_BLANK",
    "HOUSE_NO_BLANK",
    "POSTCODE_BLANK",
    "NAME_TOO_SHORT",
    "POSTCODE_INVALID",
    "is_blank",
    "validate_first_name",
    "validate_last_name",
    "validate_house_no",
    "validate_postcode",
]

Validator = Callable[[str], Optional[str]]

# Simplified UK postcode format, e.g. "SW1A 1AA", "M1 1AE", "B33 8TH"
UK_POSTCODE_PATTERN = re.compile(
    r"^[A-Z]{1,2}\d{1,2}[A-Z]?\s?\d[A-Z]{2}$",
    re.IGNORECASE | re.ASCII,
)

MIN_NAME_LENGTH = 2

FIRST_NAME_BLANK = "Please enter the recipient's first name"
LAST_NAME_BLANK = "Please enter the recipient's last name"
HOUSE_NO_BLANK = "Please enter the recipient's house number/name"
POSTCODE_BLANK = "Please enter the recipient's postcode"
NAME_TOO_SHORT = f"Name must be at least {MIN_NAME_LENGTH} characters"
POSTCODE_INVALID = "Please enter a valid UK postcode"


def is_blank(value: str) -> bool:
    """Check if a value is empty or whitespace-only."""
    return not value.strip()


def _validate_name(value: str, blank_message: str) -> Optional[str]:
    if is_blank(value):
        return blank_message
    if len(value.strip()) < MIN_NAME_LENGTH:
        return NAME_TOO_SHORT
    return None


def validate_first_name(value: str) -> Optional[str]:
    """Validate the recipient's first name.

    Args:
        value: Raw field text

    Returns:
        Error message, or None if the name has at least two
        non-whitespace-padded characters.
    """
    return _validate_name(value, FIRST_NAME_BLANK)


def validate_last_name(value: str) -> Optional[str]:
    """Validate the recipient's last name (same rules as first name)."""
    return _validate_name(value, LAST_NAME_BLANK)


def validate_house_no(value: str) -> Optional[str]:
    """Validate the house number or name. Any non-blank text is accepted."""
    if is_blank(value):
        return HOUSE_NO_BLANK
    return None


def validate_postcode(value: str) -> Optional[str]:
    """Validate a UK postcode.

    Matching is case-insensitive and the single space between the outward
    and inward codes is optional.

    Example:
        >>> validate_postcode("sw1a1aa") is None
        True
        >>> validate_postcode("12345")
        'Please enter a valid UK postcode'
    """
    if is_blank(value):
        return POSTCODE_BLANK
    if UK_POSTCODE_PATTERN.fullmatch(value) is None:
        return POSTCODE_INVALID
    return None
