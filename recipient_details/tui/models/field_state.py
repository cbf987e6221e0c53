"""Field state with validation and interaction tracking."""

from __future__ import annotations

from dataclasses import dataclass, replace

from recipient_details.lib.validators import Validator


@dataclass(frozen=True)
class FieldState:
    """Represents a single validated field's value and interaction history.

    Instances are immutable; each transition returns a new FieldState so
    the error is always recomputed together with the value it describes.

    Attributes:
        value: The current text
        error: Validation error for value, or None if valid
        is_touched: Whether the field has received focus or input
        has_been_modified: Whether a non-empty value was entered and then
            cleared. Once set it stays set.
    """

    value: str = ""
    error: str | None = None
    is_touched: bool = False
    has_been_modified: bool = False

    def should_show_error(self, force_validation: bool = False) -> bool:
        """Check if the error should be displayed.

        The error is shown only when there is one and either the field was
        cleared after holding text, or validation is forced (for example
        after a submit attempt).
        """
        return (self.has_been_modified or force_validation) and self.error is not None

    def with_value(self, value: str, validator: Validator) -> "FieldState":
        """Apply a keystroke: store value, revalidate, and track clearing."""
        cleared = bool(self.value) and not value
        return FieldState(
            value=value,
            error=validator(value),
            is_touched=True,
            has_been_modified=self.has_been_modified or cleared,
        )

    def touched(self) -> "FieldState":
        """Mark the field as focused. The error is left as is."""
        if self.is_touched:
            return self
        return replace(self, is_touched=True)

    def forced(self, validator: Validator) -> "FieldState":
        """Revalidate and make any error visible regardless of history."""
        return replace(self, error=validator(self.value), has_been_modified=True)

    def is_complete(self) -> bool:
        """Check if the field holds a non-blank, valid value."""
        return self.error is None and bool(self.value.strip())
