"""Tests for the prompt_toolkit recipient details screen.

These tests drive the field buffers directly and verify the screen logic
without requiring interactive terminal input.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
import yaml

from recipient_details.lib.validators import FIRST_NAME_BLANK, NAME_TOO_SHORT, POSTCODE_INVALID
from recipient_details.tui.app import Field, RecipientDetailsApp, format_payload, main
from recipient_details.tui.constants import ALL_FIELDS
from recipient_details.tui.settings import FormSettings


@pytest.fixture
def app(recorder, settings: FormSettings) -> RecipientDetailsApp:
    return RecipientDetailsApp(
        on_continue=recorder.on_continue,
        on_back=recorder.on_back,
        settings=settings,
    )


def _fill(app: RecipientDetailsApp, **values: str) -> None:
    for name, value in values.items():
        app._get_field(name).buffer.text = value


class TestField:
    """Tests for Field class."""

    def test_field_defaults(self) -> None:
        field = Field("first_name", "First Name")
        assert field.name == "first_name"
        assert field.label == "First Name"
        assert field.required is False
        assert field.multiline is False
        assert field.buffer.text == ""


class TestRecipientDetailsApp:
    """Tests for the screen's event handling."""

    def test_creates_all_fields(self, app: RecipientDetailsApp) -> None:
        assert [f.name for f in app.fields] == list(ALL_FIELDS)
        assert [f.required for f in app.fields] == [True, True, True, True, False]
        assert app._get_field("message").multiline is True

    def test_typing_updates_form_state(self, app: RecipientDetailsApp) -> None:
        _fill(app, first_name="J")

        assert app.form.state.first_name.value == "J"
        assert app.form.state.first_name.error == NAME_TOO_SHORT
        assert app._get_field_error(app._get_field("first_name")) is None

    def test_clearing_shows_error(self, app: RecipientDetailsApp) -> None:
        _fill(app, first_name="J")
        _fill(app, first_name="")

        assert app._get_field_error(app._get_field("first_name")) == FIRST_NAME_BLANK

    def test_postcode_buffer_is_upper_cased(self, app: RecipientDetailsApp) -> None:
        _fill(app, postcode="sw1a 1aa")

        assert app._get_field("postcode").buffer.text == "SW1A 1AA"
        assert app.form.state.postcode.value == "SW1A 1AA"

    def test_typed_postcode_keeps_cursor_at_end(self, app: RecipientDetailsApp) -> None:
        buffer = app._get_field("postcode").buffer
        buffer.insert_text("sw1a")

        assert buffer.text == "SW1A"
        assert buffer.cursor_position == 4

    def test_upper_case_growing_text_keeps_cursor_at_end(self, app: RecipientDetailsApp) -> None:
        """Upper-casing "ß" gives "SS"; the cursor follows the longer text."""
        buffer = app._get_field("postcode").buffer
        buffer.insert_text("ß")

        assert buffer.text == "SS"
        assert buffer.cursor_position == 2

    def test_message_never_has_error(self, app: RecipientDetailsApp) -> None:
        app._submit()
        assert app._get_field_error(app._get_field("message")) is None

    def test_find_shows_postcode_error(self, app: RecipientDetailsApp) -> None:
        _fill(app, postcode="12345")
        app._find_postcode()

        assert app._get_field_error(app._get_field("postcode")) == POSTCODE_INVALID
        assert POSTCODE_INVALID in app.status_message
        assert app.form.state.submit_attempted is False

    def test_find_valid_postcode(self, app: RecipientDetailsApp) -> None:
        _fill(app, postcode="M1 1AE")
        app._find_postcode()
        assert app.status_message == "Postcode format looks valid"

    def test_blank_submit(self, app: RecipientDetailsApp, recorder) -> None:
        app._submit()

        assert recorder.payloads == []
        assert app.result is None
        assert app.status_message == "Please fix 4 fields"
        for field in app.fields[:4]:
            assert app._get_field_error(field) is not None

    def test_valid_submit(self, app: RecipientDetailsApp, recorder) -> None:
        _fill(app, first_name="Jane", last_name="Doe", house_no="12", postcode="sw1a 1aa")
        app._submit()

        expected = {
            "firstName": "Jane",
            "lastName": "Doe",
            "houseNo": "12",
            "postcode": "SW1A 1AA",
            "message": "",
        }
        assert recorder.payloads == [expected]
        assert app.result == expected
        assert app.status_message == "Details accepted"

    def test_back(self, app: RecipientDetailsApp, recorder) -> None:
        app._go_back()
        assert recorder.back_calls == 1
        assert app.result is None

    def test_move_focus_touches_field(self, app: RecipientDetailsApp) -> None:
        app._move_focus(1)

        assert app.current_field_idx == 1
        assert app.form.state.last_name.is_touched is True

    def test_move_focus_wraps(self, app: RecipientDetailsApp) -> None:
        app._move_focus(-1)
        assert app.current_field_idx == len(ALL_FIELDS) - 1

    def test_enter_advances(self, app: RecipientDetailsApp) -> None:
        keep_text = app._accept_and_advance(app.fields[0].buffer)
        assert keep_text is True
        assert app.current_field_idx == 1

    def test_click_focuses_field(self, app: RecipientDetailsApp) -> None:
        app._on_field_click(2)
        assert app.current_field_idx == 2
        assert app.form.state.house_no.is_touched is True

    def test_manual_entry(self, app: RecipientDetailsApp) -> None:
        before = app.form.state
        app._manual_entry()
        assert app.form.state is before
        assert "not available" in app.status_message

    def test_help_text_follows_focus(self, app: RecipientDetailsApp) -> None:
        app._move_focus(3)
        text = "".join(fragment for _, fragment in app._get_help_text())
        assert "Postcode" in text

    def test_toggle_help(self, app: RecipientDetailsApp) -> None:
        assert app.show_help is True
        app._toggle_help()
        assert app.show_help is False

    def test_layout_builds(self, app: RecipientDetailsApp) -> None:
        """The layout can be built for both clean and error states."""
        assert app._create_layout() is not None
        app._submit()
        assert app._create_layout() is not None


class TestFormatPayload:
    """Tests for printing the submitted payload."""

    PAYLOAD = {"firstName": "Jane", "lastName": "Doe", "houseNo": "12", "postcode": "SW1A 1AA", "message": ""}

    def test_yaml(self) -> None:
        text = format_payload(self.PAYLOAD)
        assert yaml.safe_load(text) == self.PAYLOAD
        assert text.splitlines()[0] == "firstName: Jane"

    def test_json(self) -> None:
        assert json.loads(format_payload(self.PAYLOAD, "json")) == self.PAYLOAD


@pytest.mark.usefixtures("restore_root_logging")
class TestMain:
    """Tests for the command-line entry point."""

    def test_prints_payload(self, tmp_path, monkeypatch, capsys) -> None:
        monkeypatch.chdir(tmp_path)
        payload = {"firstName": "Jane", "lastName": "Doe", "houseNo": "12", "postcode": "SW1A 1AA", "message": ""}

        with patch("recipient_details.tui.app.run_form", return_value=payload) as run_form:
            exit_code = main(["--format", "json"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out) == payload
        assert run_form.call_args.kwargs["settings"].output_format == "json"

    def test_closed_without_submit(self, tmp_path, monkeypatch, capsys) -> None:
        monkeypatch.chdir(tmp_path)

        with patch("recipient_details.tui.app.run_form", return_value=None):
            exit_code = main([])

        assert exit_code == 1
        assert capsys.readouterr().out == ""

    def test_bad_config(self, tmp_path, capsys) -> None:
        config = tmp_path / "bad.yaml"
        config.write_text("form:\n  output_format: xml\n", encoding="utf-8")

        exit_code = main(["--config", str(config)])

        assert exit_code == 2
        assert "Invalid output_format" in capsys.readouterr().err

    def test_empty_form_section_runs_with_defaults(self, tmp_path, capsys) -> None:
        config = tmp_path / "empty.yaml"
        config.write_text("form:\n", encoding="utf-8")

        with patch("recipient_details.tui.app.run_form", return_value=None) as run_form:
            exit_code = main(["--config", str(config)])

        assert exit_code == 1
        assert run_form.call_args.kwargs["settings"] == FormSettings()
        assert capsys.readouterr().err == ""
