"""
================================================================================
Root Pytest Configuration
================================================================================

Registers project-wide markers and shared fixtures for the test suites.

================================================================================
"""

from typing import Generator, List

import pytest
from loguru import logger


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "unit: Tests of a single module in isolation"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-add the 'unit' marker to tests in the unit directory."""
    for item in items:
        if "unit" in item.path.parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def log_messages() -> Generator[List[str], None, None]:
    """Capture loguru messages emitted during a test."""
    messages: List[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def cases_dir(project_root):
    """Directory holding the sample suite definitions."""
    return project_root / "testsuites" / "cases"
