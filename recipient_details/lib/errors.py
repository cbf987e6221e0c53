"""Structured exception hierarchy for the recipient details form.

Validation problems with user input are never raised; they are stored on
the field state as messages. These exceptions cover programming and
configuration faults only.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

__all__ = [
    "FormError",
    "UnknownFieldError",
    "ConfigurationError",
]


class FormError(Exception):
    """Base exception for all form errors.

    Carries details and a suggestion in its message.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.details = details or {}
        self.suggestion = suggestion

        parts = [message]

        if details:
            detail_lines = [f"  {k}: {v}" for k, v in details.items()]
            parts.append("\nDetails:")
            parts.extend(detail_lines)

        if suggestion:
            parts.append(f"\nSuggestion: {suggestion}")

        super().__init__("\n".join(parts) if len(parts) > 1 else message)


class UnknownFieldError(FormError):
    """An event or lookup named a field the form does not have."""

    def __init__(
        self,
        field_name: str,
        *,
        known_fields: Iterable[str] = (),
        **kwargs: Any,
    ) -> None:
        self.field_name = field_name
        known = sorted(known_fields)

        details = kwargs.pop("details", {})
        details["field"] = field_name
        if known:
            details["known_fields"] = ", ".join(known)

        super().__init__(
            f"Unknown field '{field_name}'",
            details=details,
            suggestion=kwargs.pop("suggestion", None)
            or "Use one of the names in recipient_details.tui.constants.VALIDATED_FIELDS",
            **kwargs,
        )


class ConfigurationError(FormError):
    """Invalid value in the form settings."""

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        key: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        self.config_path = config_path
        self.key = key

        details = kwargs.pop("details", {})
        if config_path:
            details["config_path"] = config_path
        if key:
            details["key"] = key

        super().__init__(message, details=details, **kwargs)
