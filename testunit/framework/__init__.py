"""
================================================================================
Test Unit Framework
================================================================================

Minimal named test-suite runner components.

Modules:
    - suite: TestSuite / TestCase registration and execution
    - results: TestResult / RunSummary and text rendering
    - suite_loader: YAML suite definitions
    - config_loader: YAML configuration management

================================================================================
"""

from .config_loader import ConfigLoader, ConfigurationError
from .results import RunSummary, TestResult
from .suite import SuiteStateError, TestCase, TestSuite
from .suite_loader import SuiteDefinitionError, SuiteLoader

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "RunSummary",
    "TestResult",
    "SuiteStateError",
    "TestCase",
    "TestSuite",
    "SuiteDefinitionError",
    "SuiteLoader",
]
