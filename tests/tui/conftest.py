"""Shared fixtures for TUI tests."""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest

from recipient_details.tui.models import RecipientForm
from recipient_details.tui.settings import FormSettings


class PayloadRecorder:
    """Collects payloads passed to the completion callback."""

    def __init__(self) -> None:
        self.payloads: list[dict[str, str]] = []
        self.back_calls = 0

    def on_continue(self, payload) -> None:
        self.payloads.append(dict(payload))

    def on_back(self) -> None:
        self.back_calls += 1


@pytest.fixture
def recorder() -> PayloadRecorder:
    return PayloadRecorder()


@pytest.fixture
def form(recorder: PayloadRecorder) -> RecipientForm:
    """A fresh form wired to the recorder."""
    return RecipientForm(on_continue=recorder.on_continue, on_back=recorder.on_back)


@pytest.fixture
def settings() -> FormSettings:
    return FormSettings(show_help=True)


@pytest.fixture
def tmp_settings_yaml(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a settings file in a temporary project root."""
    settings_file = tmp_path / ".recipient-details.yaml"
    settings_file.write_text(
        """
form:
  output_format: JSON
  show_help: false
  log_file: ./form.log
  json_logs: true
""",
        encoding="utf-8",
    )
    yield settings_file
