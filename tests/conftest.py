"""Pytest configuration and fixtures."""

from __future__ import annotations

import logging
from typing import Generator

import pytest

from recipient_details.tui import settings as settings_module


@pytest.fixture(autouse=True)
def reset_global_settings() -> Generator[None, None, None]:
    """Make sure cached settings never leak between tests."""
    settings_module._settings = None
    yield
    settings_module._settings = None


@pytest.fixture
def restore_root_logging() -> Generator[None, None, None]:
    """Restore the root logger's handlers and level after a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
