"""
================================================================================
Run Results Module
================================================================================

Data structures produced by a single execution of a test suite.

Key Features:
- Per-case outcome records (pass/fail plus failure message)
- Aggregate summary with counts derived from the recorded results
- Deterministic text rendering consumed by external harnesses
- Dict form for JSON serialization

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


PASS_LABEL = "PASS"
FAIL_LABEL = "FAIL"


@dataclass
class TestResult:
    """Outcome of executing a single test case."""

    __test__ = False

    name: str
    passed: bool
    message: Optional[str] = None
    error_type: Optional[str] = field(default=None, compare=False)
    duration_ms: float = field(default=0.0, compare=False)

    def render(self) -> str:
        """Render as a single report line."""
        if self.passed:
            return f"{PASS_LABEL}: {self.name}"
        return f"{FAIL_LABEL}: {self.name}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "passed": self.passed,
            "message": self.message,
            "error_type": self.error_type,
            "duration_ms": round(self.duration_ms, 3),
        }


@dataclass
class RunSummary:
    """
    Aggregate result of one suite run.

    Counts are computed from ``results`` rather than stored, so
    ``passed_count + failed_count == len(results)`` always holds.

    Example:
        summary = suite.run()
        print(summary)
        # PASS: A
        # FAIL: B: boom
        # Passed: 1, Failed: 1
    """

    results: List[TestResult] = field(default_factory=list)
    suite_name: str = ""

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    @property
    def total(self) -> int:
        return len(self.results)

    def all_passed(self) -> bool:
        """Check if every recorded case passed."""
        return all(r.passed for r in self.results)

    def get_failures(self) -> List[TestResult]:
        """Get list of failed case results."""
        return [r for r in self.results if not r.passed]

    def totals_line(self) -> str:
        return f"Passed: {self.passed_count}, Failed: {self.failed_count}"

    def render(self) -> str:
        """
        Render the summary as text.

        One line per case in registration order, followed by the totals
        line. An empty run renders only the totals line.

        Returns:
            Multi-line report string without a trailing newline
        """
        lines = [r.render() for r in self.results]
        lines.append(self.totals_line())
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-serializable dictionary.

        Returns:
            Dictionary with suite name, counts and per-case results
        """
        return {
            "suite": self.suite_name,
            "passed": self.passed_count,
            "failed": self.failed_count,
            "results": [r.to_dict() for r in self.results],
        }

    def __str__(self) -> str:
        return self.render()


__all__ = [
    "TestResult",
    "RunSummary",
]
