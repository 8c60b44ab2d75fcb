# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import metarules  # noqa: F401
except ImportError:
    raise ImportError("metarules is not installed. Run: pip install -e '.[dev]'") from None

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo logging_config.configure() side effects between tests."""
    root = logging.getLogger()
    package = logging.getLogger("metarules")
    old_handlers = root.handlers[:]
    old_level = root.level
    old_package_level = package.level
    yield
    root.handlers = old_handlers
    root.setLevel(old_level)
    package.setLevel(old_package_level)
    structlog.reset_defaults()
