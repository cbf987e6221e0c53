"""Full-screen prompt_toolkit application for entering recipient details.

The screen is a projection of RecipientFormState: every keystroke, focus
change and button press becomes a form event, and the layout is rebuilt
from the resulting state. Errors appear only after a field is cleared,
after Find (postcode), or after the first Continue.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml
from prompt_toolkit import Application
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.formatted_text import FormattedText, HTML
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import (
    BufferControl,
    FormattedTextControl,
    HSplit,
    Layout,
    ScrollablePane,
    VSplit,
    Window,
)
from prompt_toolkit.layout.containers import ScrollOffsets
from prompt_toolkit.layout.controls import UIContent, UIControl
from prompt_toolkit.layout.dimension import Dimension as D
from prompt_toolkit.mouse_events import MouseEvent, MouseEventType
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame

from recipient_details.lib.errors import ConfigurationError
from recipient_details.lib.logging import get_form_logger, setup_logging
from recipient_details.tui.constants import (
    ALL_FIELDS,
    FIELD_HELP,
    FIELD_LABELS,
    FORM_NAME,
    MESSAGE,
    POSTCODE,
    SCREEN_TITLE,
    VALIDATED_FIELDS,
)
from recipient_details.tui.models import RecipientForm
from recipient_details.tui.settings import OUTPUT_FORMATS, FormSettings, get_settings

logger = get_form_logger(__name__)
logger.set_context(form=FORM_NAME)


# Application style
STYLE = Style.from_dict({
    "title": "bold bg:#005f87 #ffffff",
    "field-label": "#d7d700",
    "field-label.required": "#d7d700 bold",
    "field-input": "bg:#1e1e1e #ffffff",
    "field-input.focused": "bg:#2a2a2a #ffffff",
    "field-input.invalid": "bg:#3a1515 #ff6666",  # Invalid value - red tint
    "field-input.invalid-focused": "bg:#4a2020 #ff6666",  # Invalid focused - darker red
    "field-help.inline": "#6a9955 italic",
    "placeholder": "#808080 italic",
    "error": "bold #ff0000",
    "success": "bold #00ff00",
    "help-panel": "bg:#1c1c1c #a0a0a0",
    "status-bar": "bg:#005f87 #ffffff",
    "button": "bg:#404040 #ffffff",
    "button.primary": "bg:#bdbdbd #ffffff bold",
    "button.hover": "bg:#005f87 #ffffff bold",
    "link": "underline",
})


class ClickableBufferControl(BufferControl):
    """BufferControl that notifies when it receives focus via click."""

    def __init__(
        self,
        buffer: Buffer,
        field_idx: int,
        on_focus: Callable[[int], None],
        **kwargs: Any,
    ):
        super().__init__(buffer=buffer, focusable=True, **kwargs)
        self.field_idx = field_idx
        self.on_focus = on_focus

    def mouse_handler(self, mouse_event: MouseEvent) -> None:
        if mouse_event.event_type == MouseEventType.MOUSE_UP:
            self.on_focus(self.field_idx)
        # Let parent handle cursor positioning and selection
        super().mouse_handler(mouse_event)


class ClickableButton(UIControl):
    """A clickable button control."""

    def __init__(
        self,
        text: str,
        handler: Callable[[], None],
        style: str = "class:button",
    ):
        self.text = text
        self.handler = handler
        self.style = style
        self._hover = False

    def create_content(self, width: int, height: int) -> UIContent:
        style = "class:button.hover" if self._hover else self.style

        def get_line(i: int) -> list[tuple[str, str]]:
            if i == 0:
                return [(style, f" {self.text} ")]
            return []

        return UIContent(get_line=get_line, line_count=1)

    def mouse_handler(self, mouse_event: MouseEvent) -> None:
        if mouse_event.event_type == MouseEventType.MOUSE_UP:
            self.handler()
        elif mouse_event.event_type == MouseEventType.MOUSE_MOVE:
            self._hover = True
        else:
            self._hover = False

    def is_focusable(self) -> bool:
        return False


class ClickableFieldLabel(UIControl):
    """A clickable field label that selects the field on click."""

    def __init__(
        self,
        label_parts: list[tuple[str, str]],
        field_idx: int,
        on_click: Callable[[int], None],
    ):
        self.label_parts = label_parts
        self.field_idx = field_idx
        self.on_click = on_click

    def create_content(self, width: int, height: int) -> UIContent:
        def get_line(i: int) -> list[tuple[str, str]]:
            if i == 0:
                return self.label_parts
            return []

        return UIContent(get_line=get_line, line_count=1)

    def mouse_handler(self, mouse_event: MouseEvent) -> None:
        if mouse_event.event_type == MouseEventType.MOUSE_UP:
            self.on_click(self.field_idx)

    def is_focusable(self) -> bool:
        return False


class Field:
    """Represents an editable text field on the screen."""

    def __init__(
        self,
        name: str,
        label: str,
        *,
        required: bool = False,
        help_text: str = "",
        multiline: bool = False,
        on_accept: Callable[[Buffer], bool] | None = None,
    ):
        self.name = name
        self.label = label
        self.required = required
        self.help_text = help_text
        self.multiline = multiline
        self.buffer = Buffer(name=name, multiline=multiline, accept_handler=on_accept)


class RecipientDetailsApp:
    """Full-screen recipient details form.

    Tab/Shift+Tab move between fields, Enter moves to the next field,
    Ctrl+F checks the postcode, Ctrl+S continues, Escape goes back and
    Ctrl+Q quits.
    """

    def __init__(
        self,
        on_continue: Callable[[Mapping[str, str]], None] | None = None,
        on_back: Callable[[], None] | None = None,
        settings: FormSettings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.on_continue = on_continue
        self.on_back = on_back
        self.form = RecipientForm(on_continue=self._handle_continue, on_back=self._handle_back)
        self.fields: list[Field] = []
        self.current_field_idx = 0
        self.show_help = self.settings.show_help
        self.status_message = ""
        self.result: dict[str, str] | None = None
        self.app: Application | None = None
        # Set while the screen writes a normalized value back into a buffer
        self._syncing = False
        self._scrollable_pane: ScrollablePane | None = None
        self._create_fields()

    def run(self) -> dict[str, str] | None:
        """Run the full-screen application.

        Returns:
            The submitted payload, or None if the user went back or quit.
        """
        self.status_message = "Fill in the recipient's details"
        self.form.focus(self.fields[self.current_field_idx].name)

        self.app = Application(
            layout=self._create_layout(),
            key_bindings=self._create_bindings(),
            style=STYLE,
            full_screen=True,
            mouse_support=True,
        )
        self._focus_current_field()
        self.app.run()
        return self.result

    def _create_fields(self) -> None:
        """Create all form fields in screen order."""
        for name in ALL_FIELDS:
            field = Field(
                name,
                FIELD_LABELS[name],
                required=name in VALIDATED_FIELDS,
                help_text=FIELD_HELP.get(name, ""),
                multiline=name == MESSAGE,
                on_accept=None if name == MESSAGE else self._accept_and_advance,
            )
            field.buffer.on_text_changed += self._make_change_handler(field)
            self.fields.append(field)

    def _make_change_handler(self, field: Field) -> Callable[[Buffer], None]:
        def handler(buffer: Buffer) -> None:
            self._on_field_changed(buffer, field)

        return handler

    def _on_field_changed(self, buffer: Buffer, field: Field) -> None:
        """Handle a keystroke: update the form and normalize the buffer."""
        if self._syncing:
            return

        state = self.form.change(field.name, buffer.text)
        stored = state.get_value(field.name)
        if stored != buffer.text:
            # Postcode is stored upper-cased; mirror that in the buffer.
            # upper() can change the length ("ß" -> "SS"), so keep the
            # cursor at the same distance from the end.
            from_end = len(buffer.text) - buffer.cursor_position
            self._syncing = True
            try:
                buffer.text = stored
                buffer.cursor_position = max(0, len(stored) - from_end)
            finally:
                self._syncing = False

        self._refresh_layout()

    def _accept_and_advance(self, buffer: Buffer) -> bool:
        """Enter in a single-line field moves to the next field."""
        self._move_focus(1)
        # Keep the text in the buffer
        return True

    def _move_focus(self, step: int) -> None:
        self.current_field_idx = (self.current_field_idx + step) % len(self.fields)
        self.form.focus(self.fields[self.current_field_idx].name)
        self._refresh_layout()

    def _on_field_click(self, field_idx: int) -> None:
        """Handle click on a field label or input."""
        self.current_field_idx = field_idx
        self.form.focus(self.fields[field_idx].name)
        self._refresh_layout()

    def _get_field(self, name: str) -> Field:
        return next(f for f in self.fields if f.name == name)

    def _get_field_error(self, field: Field) -> str | None:
        """Get the error currently displayed under a field."""
        if field.name not in VALIDATED_FIELDS:
            return None
        return self.form.state.visible_error(field.name)

    def _find_postcode(self) -> None:
        """Postcode lookup is not available; Find only checks the format."""
        state = self.form.find()
        error = state.visible_error(POSTCODE)
        self.status_message = f"Postcode: {error}" if error else "Postcode format looks valid"
        self._refresh_layout()

    def _manual_entry(self) -> None:
        self.form.manual_entry()
        self.status_message = "Manual address entry is not available yet"
        self._refresh_layout()

    def _submit(self) -> None:
        """Attempt to continue with the current values."""
        state = self.form.submit()
        if self.result is None:
            count = len(state.visible_errors())
            self.status_message = f"Please fix {count} field{'s' if count != 1 else ''}"
        self._refresh_layout()

    def _go_back(self) -> None:
        self.form.back()

    def _handle_continue(self, payload: Mapping[str, str]) -> None:
        self.result = dict(payload)
        self.status_message = "Details accepted"
        if self.on_continue is not None:
            self.on_continue(payload)
        if self.app:
            self.app.exit(result=self.result)

    def _handle_back(self) -> None:
        if self.on_back is not None:
            self.on_back()
        if self.app:
            self.app.exit()

    def _quit_app(self) -> None:
        if self.app:
            self.app.exit()

    def _toggle_help(self) -> None:
        self.show_help = not self.show_help
        self._refresh_layout()

    def _create_layout(self) -> Layout:
        """Create the application layout."""
        form_hsplit = HSplit(self._build_form_content())
        if self._scrollable_pane is None:
            self._scrollable_pane = ScrollablePane(
                form_hsplit,
                show_scrollbar=True,
                scroll_offsets=ScrollOffsets(top=4, bottom=4),
            )
        else:
            # Keep the same pane to preserve scroll position
            self._scrollable_pane.content = form_hsplit

        title_bar = VSplit([
            Window(
                content=ClickableButton("← Back", self._go_back, style="class:title"),
                style="class:title",
                height=1,
                width=10,
            ),
            Window(
                content=FormattedTextControl(HTML(f"<b>{SCREEN_TITLE}</b>")),
                style="class:title",
                height=1,
            ),
            Window(
                content=ClickableButton("❌ Quit", self._quit_app, style="class:title"),
                style="class:title",
                height=1,
                width=10,
            ),
        ], height=1)

        status_bar = Window(
            content=FormattedTextControl(self._get_status_bar),
            style="class:status-bar",
            height=1,
        )

        body: list[Any] = [
            title_bar,
            Frame(body=self._scrollable_pane, title="Recipient"),
        ]
        if self.show_help:
            body.append(
                Window(
                    content=FormattedTextControl(self._get_help_text),
                    style="class:help-panel",
                    height=D(min=1, max=3),
                    wrap_lines=True,
                )
            )
        body.append(status_bar)
        return Layout(HSplit(body))

    def _build_form_content(self) -> list:
        """Build the form rows, buttons and spacing."""
        content: list[Any] = [Window(height=1)]

        for idx, field in enumerate(self.fields):
            if field.name == MESSAGE:
                content.append(
                    Window(
                        content=ClickableButton(
                            "Enter address manually", self._manual_entry, style="class:link"
                        ),
                        height=1,
                    )
                )
                content.append(Window(height=1))
            content.append(self._create_field_row(field, idx))
            content.append(Window(height=1))

        content.append(
            VSplit([
                Window(
                    content=ClickableButton("Continue", self._submit, style="class:button.primary"),
                    height=1,
                    width=14,
                ),
                Window(),
            ])
        )
        return content

    def _create_field_row(self, field: Field, idx: int) -> HSplit:
        """Create a row for a single field with its error line."""
        is_focused = idx == self.current_field_idx
        error = self._get_field_error(field)

        label_parts: list[tuple[str, str]] = []
        if field.required:
            label_parts.append(("class:field-label.required", f"{field.label}* "))
        else:
            label_parts.append(("class:field-label", f"{field.label} "))
        if error:
            label_parts.append(("class:error", "[!] "))

        if error:
            value_style = "class:field-input.invalid-focused" if is_focused else "class:field-input.invalid"
        elif is_focused:
            value_style = "class:field-input.focused"
        else:
            value_style = "class:field-input"

        label = Window(
            content=ClickableFieldLabel(label_parts, idx, self._on_field_click),
            width=D(min=24, max=26),
            height=1,
        )
        value = Window(
            content=ClickableBufferControl(
                buffer=field.buffer,
                field_idx=idx,
                on_focus=self._on_field_click,
            ),
            style=value_style,
            height=5 if field.multiline else 1,
            cursorline=is_focused,
            wrap_lines=field.multiline,
        )

        row_items = [label, value]
        if field.name == POSTCODE:
            row_items.append(
                Window(
                    content=ClickableButton("Find", self._find_postcode),
                    height=1,
                    width=8,
                )
            )

        rows: list[Any] = [VSplit(row_items, padding=1)]
        if error:
            rows.append(
                Window(
                    content=FormattedTextControl(FormattedText([("class:error", f"  ⚠ {error}")])),
                    height=1,
                )
            )
        elif field.name == MESSAGE and not field.buffer.text:
            rows.append(
                Window(
                    content=FormattedTextControl(FormattedText([("class:placeholder", f"  {field.help_text}")])),
                    height=1,
                )
            )
        return HSplit(rows, padding=0)

    def _get_help_text(self) -> FormattedText:
        """Get help for the focused field."""
        field = self.fields[self.current_field_idx]
        if not field.help_text:
            return FormattedText([])
        return FormattedText([("class:field-help.inline", f"  💡 {field.label}: {field.help_text}")])

    def _get_status_bar(self) -> FormattedText:
        """Get status bar content with keyboard shortcut hints."""
        shortcuts = "Tab:Nav  Ctrl+F:Find  Ctrl+S:Continue  Esc:Back  F1:Help  Ctrl+Q:Quit"
        return FormattedText([
            ("class:status-bar", f"  {self.status_message}  │  {shortcuts}  ")
        ])

    def _create_bindings(self) -> KeyBindings:
        """Create key bindings."""
        kb = KeyBindings()

        @kb.add("c-q")
        def quit_(event):
            """Quit without submitting."""
            self._quit_app()

        @kb.add("escape")
        def back_(event):
            """Go back."""
            self._go_back()

        @kb.add("c-s")
        def continue_(event):
            """Submit the form."""
            self._submit()

        @kb.add("c-f")
        def find_(event):
            """Check the postcode."""
            self._find_postcode()

        @kb.add("f1")
        def help_(event):
            """Toggle the help panel."""
            self._toggle_help()

        @kb.add("tab")
        def next_field_(event):
            """Move to next field."""
            self._move_focus(1)

        @kb.add("s-tab")
        def prev_field_(event):
            """Move to previous field."""
            self._move_focus(-1)

        return kb

    def _focus_current_field(self) -> None:
        """Focus the current field."""
        if self.app and 0 <= self.current_field_idx < len(self.fields):
            try:
                self.app.layout.focus(self.fields[self.current_field_idx].buffer)
            except ValueError:
                # Buffer not in layout
                pass

    def _refresh_layout(self) -> None:
        """Rebuild the layout from the current form state."""
        if self.app:
            self.app.layout = self._create_layout()
            self._focus_current_field()


def format_payload(payload: Mapping[str, str], output_format: str = "yaml") -> str:
    """Render a submitted payload for printing."""
    if output_format == "json":
        return json.dumps(dict(payload), indent=2, ensure_ascii=False)
    return yaml.safe_dump(dict(payload), sort_keys=False, allow_unicode=True, default_flow_style=False)


def run_form(
    on_continue: Callable[[Mapping[str, str]], None] | None = None,
    on_back: Callable[[], None] | None = None,
    settings: FormSettings | None = None,
) -> dict[str, str] | None:
    """Run the recipient details screen and return the submitted payload."""
    app = RecipientDetailsApp(on_continue=on_continue, on_back=on_back, settings=settings)
    return app.run()


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the TUI application."""
    import argparse
    import sys

    parser = argparse.ArgumentParser(
        description="Enter recipient details",
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to a settings YAML file (default: ./.recipient-details.yaml)",
    )
    parser.add_argument(
        "--format", "-f",
        choices=OUTPUT_FORMATS,
        help="How to print the submitted details",
    )
    parser.add_argument("--log-file", help="Write logs to this file")
    parser.add_argument("--json-logs", action="store_true", help="Use JSON log format")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    try:
        settings = FormSettings.load(config_path=Path(args.config) if args.config else None)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.format:
        settings.output_format = args.format
    if args.log_file:
        settings.log_file = args.log_file
    settings.json_logs = settings.json_logs or args.json_logs
    settings.verbose = settings.verbose or args.verbose

    setup_logging(
        verbose=settings.verbose,
        json_format=settings.json_logs,
        log_file=settings.log_file,
        console=False,
    )

    payload = run_form(settings=settings)
    if payload is None:
        logger.info("Form closed without submitting")
        return 1

    print(format_payload(payload, settings.output_format).rstrip("\n"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
