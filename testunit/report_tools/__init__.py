"""Report helpers for suite run results."""

from .allure_utils import attach_json, attach_summary, attach_text

__all__ = [
    "attach_json",
    "attach_summary",
    "attach_text",
]
