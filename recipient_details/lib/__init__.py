"""Form library modules.

This package contains the validators, error types and logging helpers
shared by the form state and the screen.
"""

from recipient_details.lib.errors import ConfigurationError, FormError, UnknownFieldError
from recipient_details.lib.logging import FormLogger, JSONFormatter, get_form_logger, setup_logging
from recipient_details.lib.validators import (
    UK_POSTCODE_PATTERN,
    Validator,
    is_blank,
    validate_first_name,
    validate_house_no,
    validate_last_name,
    validate_postcode,
)

__all__ = [
    "FormError",
    "UnknownFieldError",
    "ConfigurationError",
    "FormLogger",
    "JSONFormatter",
    "get_form_logger",
    "setup_logging",
    "UK_POSTCODE_PATTERN",
    "Validator",
    "is_blank",
    "validate_first_name",
    "validate_last_name",
    "validate_house_no",
    "validate_postcode",
]
