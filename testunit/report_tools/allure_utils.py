"""
================================================================================
Allure Report Utilities
================================================================================

Helpers that attach suite run results to Allure reports. When no Allure
listener is active (for example outside pytest) these calls do nothing.

================================================================================
"""

import json
from typing import Any

import allure

from testunit.framework.results import RunSummary


def attach_json(data: Any, name: str = "Data", indent: int = 2):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
        indent: JSON indentation
    """
    allure.attach(
        json.dumps(data, indent=indent, default=str),
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_summary(summary: RunSummary, indent: int = 2):
    """
    Attach a suite run summary as both rendered text and JSON.

    Args:
        summary: Result of TestSuite.run()
        indent: JSON indentation
    """
    title = summary.suite_name or "unnamed suite"
    with allure.step(f"Summary: {title} ({summary.totals_line()})"):
        attach_text(summary.render(), name=f"Report: {title}")
        attach_json(summary.to_dict(), name=f"Results: {title}", indent=indent)
