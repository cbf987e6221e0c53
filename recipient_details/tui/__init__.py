"""prompt_toolkit TUI for entering recipient details.

This package provides a Terminal User Interface for the recipient details
form with validation errors that appear only after user interaction.

Usage:
    python -m recipient_details.tui
    python -m recipient_details.tui --format json
"""

from __future__ import annotations

__version__ = "1.0.0"

__all__ = [
    "RecipientDetailsApp",
    "run_form",
]


def __getattr__(name: str):
    """Lazy import of TUI components."""
    if name == "RecipientDetailsApp":
        from recipient_details.tui.app import RecipientDetailsApp
        return RecipientDetailsApp
    if name == "run_form":
        from recipient_details.tui.app import run_form
        return run_form
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
