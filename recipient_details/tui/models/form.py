"""Form controller that owns the state and fires the screen callbacks."""

from __future__ import annotations

from typing import Callable, Mapping

from recipient_details.lib.logging import get_form_logger
from recipient_details.tui.constants import FORM_NAME
from recipient_details.tui.models.form_state import (
    FindPressed,
    FocusGained,
    FormEvent,
    RecipientFormState,
    SubmitPressed,
    ValueChanged,
    reduce,
)

ContinueCallback = Callable[[Mapping[str, str]], None]
BackCallback = Callable[[], None]


def _noop_continue(payload: Mapping[str, str]) -> None:
    return None


def _noop_back() -> None:
    return None


class RecipientForm:
    """Holds the current RecipientFormState and applies events to it.

    The only side effects of the form live here: on a valid submit the
    completion callback receives the payload mapping, and back() calls the
    back-navigation callback.

    Example:
        form = RecipientForm(on_continue=print)
        form.change("first_name", "Jane")
        form.submit()  # Not valid yet, nothing printed
    """

    def __init__(
        self,
        on_continue: ContinueCallback | None = None,
        on_back: BackCallback | None = None,
        state: RecipientFormState | None = None,
    ) -> None:
        self.on_continue = on_continue or _noop_continue
        self.on_back = on_back or _noop_back
        self.state = state or RecipientFormState()
        self._log = get_form_logger(__name__)
        self._log.set_context(form=FORM_NAME)

    def dispatch(self, event: FormEvent) -> RecipientFormState:
        """Apply an event and return the new state.

        A SubmitPressed event invokes on_continue once when the resulting
        state is valid.
        """
        self.state = reduce(self.state, event)
        self._log.debug("Applied %s", type(event).__name__)

        if isinstance(event, SubmitPressed):
            if self.state.is_valid():
                self._log.info("Submit accepted")
                self.on_continue(self.state.to_payload())
            else:
                self._log.info(
                    "Submit rejected",
                    extra={"invalid_fields": sorted(self.state.visible_errors())},
                )
        return self.state

    def change(self, field_name: str, value: str) -> RecipientFormState:
        return self.dispatch(ValueChanged(field_name, value))

    def focus(self, field_name: str) -> RecipientFormState:
        return self.dispatch(FocusGained(field_name))

    def find(self) -> RecipientFormState:
        """Check the postcode, showing its error without a full submit."""
        return self.dispatch(FindPressed())

    def submit(self) -> RecipientFormState:
        return self.dispatch(SubmitPressed())

    def back(self) -> None:
        self._log.debug("Back requested")
        self.on_back()

    def manual_entry(self) -> None:
        """Manual address entry is not available; the state is unchanged."""
        self._log.debug("Manual address entry requested")
