"""
Central pytest configuration for the clinic records tests.

This file provides common fixtures, test markers, and setup
for both unit and integration tests.
"""

import logging

import pytest

from tests.fixtures.domain_fixtures import *  # noqa: F401,F403
from tests.fixtures.service_fixtures import *  # noqa: F401,F403


def pytest_collection_modifyitems(config, items):
    """Add markers based on test file location and name."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        if "auth" in str(item.fspath) or "auth" in item.name:
            item.add_marker(pytest.mark.auth)

        if "security" in str(item.fspath) or "security" in item.name:
            item.add_marker(pytest.mark.security)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep tests independent of the developer's environment."""
    for name in (
        "CLINIC_DATA_DIR",
        "CLINIC_ATOMIC_SAVE",
        "CLINIC_DEFAULT_ADMIN_ID",
        "CLINIC_DEFAULT_ADMIN_USERNAME",
        "CLINIC_DEFAULT_ADMIN_PASSWORD",
        "LOG_LEVEL",
        "LOG_TO_FILE",
        "LOG_DIR",
        "LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def clean_logging():
    """Clean up logging handlers before and after each test."""
    root_logger = logging.getLogger()

    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level

    yield

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    for handler in original_handlers:
        root_logger.addHandler(handler)

    root_logger.setLevel(original_level)
