"""Recipient details test suite.

- test_validators.py: field validation rules
- test_errors.py: structured exceptions
- test_logging_config.py: logging setup and JSON formatting
- tui/: UI-agnostic form state, settings and the prompt_toolkit screen
"""
