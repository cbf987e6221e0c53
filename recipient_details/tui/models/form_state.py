"""Immutable state and reducer for the recipient details form.

The form is a product of four FieldState values, the free-text message and
a submit_attempted flag. Every user action is an event, and reduce() maps
(state, event) to the next state without side effects. Rendering reads the
state; it never mutates it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Union

from recipient_details.lib.errors import UnknownFieldError
from recipient_details.tui.constants import (
    MESSAGE,
    PAYLOAD_KEYS,
    POSTCODE,
    UPPERCASE_FIELDS,
    VALIDATED_FIELDS,
    VALIDATORS,
)
from recipient_details.tui.models.field_state import FieldState

logger = logging.getLogger(__name__)

__all__ = [
    "RecipientFormState",
    "ValueChanged",
    "FocusGained",
    "MessageChanged",
    "FindPressed",
    "SubmitPressed",
    "FormEvent",
    "reduce",
]


@dataclass(frozen=True)
class ValueChanged:
    """The text of a field changed (one keystroke or paste)."""

    field_name: str
    value: str


@dataclass(frozen=True)
class FocusGained:
    """A field received input focus."""

    field_name: str


@dataclass(frozen=True)
class MessageChanged:
    """The free-text message changed."""

    value: str


@dataclass(frozen=True)
class FindPressed:
    """The postcode Find action was invoked."""


@dataclass(frozen=True)
class SubmitPressed:
    """The Continue action was invoked."""


FormEvent = Union[ValueChanged, FocusGained, MessageChanged, FindPressed, SubmitPressed]


@dataclass(frozen=True)
class RecipientFormState:
    """UI-agnostic state for the recipient details form.

    Attributes:
        first_name: Recipient's first name
        last_name: Recipient's last name
        house_no: House number or name
        postcode: UK postcode, stored upper-cased
        message: Free text printed verbatim, never validated
        submit_attempted: Set by the first submit and never cleared
    """

    first_name: FieldState = field(default_factory=FieldState)
    last_name: FieldState = field(default_factory=FieldState)
    house_no: FieldState = field(default_factory=FieldState)
    postcode: FieldState = field(default_factory=FieldState)
    message: str = ""
    submit_attempted: bool = False

    def get_field(self, field_name: str) -> FieldState:
        """Get the state of a validated field by name."""
        if field_name not in VALIDATED_FIELDS:
            raise UnknownFieldError(field_name, known_fields=VALIDATED_FIELDS)
        return getattr(self, field_name)

    def with_field(self, field_name: str, field_state: FieldState) -> "RecipientFormState":
        """Return a copy with one validated field replaced."""
        if field_name not in VALIDATED_FIELDS:
            raise UnknownFieldError(field_name, known_fields=VALIDATED_FIELDS)
        return replace(self, **{field_name: field_state})

    def get_value(self, field_name: str) -> str:
        """Get the current text of any field, including the message."""
        if field_name == MESSAGE:
            return self.message
        return self.get_field(field_name).value

    def visible_error(self, field_name: str) -> str | None:
        """Get the error to display for a field, or None if it stays hidden."""
        field_state = self.get_field(field_name)
        if field_state.should_show_error(self.submit_attempted):
            return field_state.error
        return None

    def visible_errors(self) -> dict[str, str]:
        """Get all currently displayed errors keyed by field name."""
        errors: dict[str, str] = {}
        for field_name in VALIDATED_FIELDS:
            error = self.visible_error(field_name)
            if error is not None:
                errors[field_name] = error
        return errors

    def is_valid(self) -> bool:
        """Check if every validated field has a valid, non-blank value."""
        return all(self.get_field(name).is_complete() for name in VALIDATED_FIELDS)

    def to_payload(self) -> dict[str, str]:
        """Build the mapping handed to the completion callback."""
        return {PAYLOAD_KEYS[name]: self.get_value(name) for name in PAYLOAD_KEYS}


def reduce(state: RecipientFormState, event: FormEvent) -> RecipientFormState:
    """Apply one event to the form state.

    Args:
        state: Current form state
        event: The user action

    Returns:
        The next form state. The input state is never modified.

    Raises:
        UnknownFieldError: If the event names a field the form does not have
        TypeError: If event is not a form event
    """
    if isinstance(event, ValueChanged):
        if event.field_name == MESSAGE:
            return replace(state, message=event.value)
        current = state.get_field(event.field_name)
        value = event.value
        if event.field_name in UPPERCASE_FIELDS:
            value = value.upper()
        return state.with_field(
            event.field_name,
            current.with_value(value, VALIDATORS[event.field_name]),
        )

    if isinstance(event, FocusGained):
        if event.field_name == MESSAGE:
            return state
        return state.with_field(event.field_name, state.get_field(event.field_name).touched())

    if isinstance(event, MessageChanged):
        return replace(state, message=event.value)

    if isinstance(event, FindPressed):
        return state.with_field(POSTCODE, state.postcode.forced(VALIDATORS[POSTCODE]))

    if isinstance(event, SubmitPressed):
        updates = {name: state.get_field(name).forced(VALIDATORS[name]) for name in VALIDATED_FIELDS}
        next_state = replace(state, submit_attempted=True, **updates)
        logger.debug("Submit attempted; visible errors: %s", sorted(next_state.visible_errors()))
        return next_state

    raise TypeError(f"Unsupported form event: {event!r}")
