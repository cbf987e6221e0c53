"""Entry point for running the TUI as a module.

Usage:
    python -m recipient_details.tui
    python -m recipient_details.tui --config ./.recipient-details.yaml
"""

from __future__ import annotations

from recipient_details.tui.app import main

if __name__ == "__main__":
    raise SystemExit(main())
