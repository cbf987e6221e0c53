"""CLI entry point for the recipient details form.

Usage:
    python -m recipient_details
    python -m recipient_details --format json --log-file form.log
"""

from __future__ import annotations

from recipient_details.tui.app import main

if __name__ == "__main__":
    raise SystemExit(main())
