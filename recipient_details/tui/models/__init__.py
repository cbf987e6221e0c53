"""UI-agnostic state management for the TUI.

This module provides testable state classes that can be used without
prompt_toolkit. The state layer tracks field values, their validation
errors and the interaction history that decides when errors are shown.
"""

from recipient_details.tui.models.field_state import FieldState
from recipient_details.tui.models.form_state import (
    FindPressed,
    FocusGained,
    FormEvent,
    MessageChanged,
    RecipientFormState,
    SubmitPressed,
    ValueChanged,
    reduce,
)
from recipient_details.tui.models.form import RecipientForm

__all__ = [
    "FieldState",
    "RecipientFormState",
    "RecipientForm",
    "FormEvent",
    "ValueChanged",
    "FocusGained",
    "MessageChanged",
    "FindPressed",
    "SubmitPressed",
    "reduce",
]
