"""
================================================================================
Test Unit
================================================================================

A minimal named test-suite runner: register named cases, run them in order
with per-case fault isolation, and report pass/fail counts.

Example:
    from testunit import TestSuite

    suite = TestSuite("S")
    suite.add("A", lambda: None)
    suite.add("B", failing_check)

    summary = suite.run()
    print(summary)  # ... Passed: 1, Failed: 1

================================================================================
"""

from testunit.framework.results import RunSummary, TestResult
from testunit.framework.suite import SuiteStateError, TestCase, TestSuite

__version__ = "1.0.0"

__all__ = [
    "RunSummary",
    "SuiteStateError",
    "TestCase",
    "TestResult",
    "TestSuite",
    "__version__",
]
