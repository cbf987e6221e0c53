"""Shared constants for TUI modules.

Centralizes field names, labels and payload keys used by the models and
the screen.
"""

from __future__ import annotations

from recipient_details.lib.validators import (
    Validator,
    validate_first_name,
    validate_house_no,
    validate_last_name,
    validate_postcode,
)

FORM_NAME = "recipient_details"
SCREEN_TITLE = "Enter Recipient Details"

FIRST_NAME = "first_name"
LAST_NAME = "last_name"
HOUSE_NO = "house_no"
POSTCODE = "postcode"
MESSAGE = "message"

# Validated fields in screen order
VALIDATED_FIELDS: tuple[str, ...] = (FIRST_NAME, LAST_NAME, HOUSE_NO, POSTCODE)

# All fields in screen order (message is never validated)
ALL_FIELDS: tuple[str, ...] = VALIDATED_FIELDS + (MESSAGE,)

VALIDATORS: dict[str, Validator] = {
    FIRST_NAME: validate_first_name,
    LAST_NAME: validate_last_name,
    HOUSE_NO: validate_house_no,
    POSTCODE: validate_postcode,
}

# Mapping of field names to the keys passed to the completion callback
PAYLOAD_KEYS: dict[str, str] = {
    FIRST_NAME: "firstName",
    LAST_NAME: "lastName",
    HOUSE_NO: "houseNo",
    POSTCODE: "postcode",
    MESSAGE: "message",
}

FIELD_LABELS: dict[str, str] = {
    FIRST_NAME: "Recipient's First Name",
    LAST_NAME: "Recipient's Last Name",
    HOUSE_NO: "House No. or Name",
    POSTCODE: "Postcode",
    MESSAGE: "Message",
}

FIELD_HELP: dict[str, str] = {
    FIRST_NAME: "At least 2 characters, as it should appear on the envelope",
    LAST_NAME: "At least 2 characters, as it should appear on the envelope",
    HOUSE_NO: "House number or building name, e.g. 12 or Rose Cottage",
    POSTCODE: "UK postcode, e.g. SW1A 1AA. Ctrl+F checks it",
    MESSAGE: "Your message will be printed exactly as you type it",
}

# Fields whose stored value is upper-cased on every change
UPPERCASE_FIELDS = frozenset({POSTCODE})
