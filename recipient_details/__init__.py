"""Recipient details form with interaction-aware validation.

This package provides the validation rules and UI-agnostic state for a
recipient details form, plus a full-screen terminal screen to fill it in.

Usage:
    python -m recipient_details
    python -m recipient_details --format json
"""

from recipient_details.tui.models import FieldState, RecipientForm, RecipientFormState

__version__ = "1.0.0"

__all__ = [
    "FieldState",
    "RecipientForm",
    "RecipientFormState",
]
