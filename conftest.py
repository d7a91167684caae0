"""
Repository-level pytest configuration.

Keeps shared singletons (configuration, logger setup) isolated between tests
so that each test sees a predictable environment.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest
from loguru import logger

from testunit.common import reset_logger
from testunit.framework.config_loader import ConfigLoader


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch) -> Generator[None, None, None]:
    """Drop cached configuration and TESTUNIT_* overrides around each test."""
    for key in list(os.environ):
        if key.startswith("TESTUNIT_"):
            monkeypatch.delenv(key, raising=False)

    ConfigLoader.reset()
    reset_logger()
    yield
    ConfigLoader.reset()
    reset_logger()
    # drop sinks bound to per-test capture streams
    logger.remove()
