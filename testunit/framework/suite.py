"""
================================================================================
Test Suite Module
================================================================================

A named, ordered collection of test cases with collective reporting.

Procedures are zero-argument callables. A procedure signals failure by
raising (typically ``AssertionError``); returning normally is a pass no
matter what it returns. Every call is trapped individually so one failing
case never stops the cases after it.

Usage:
    suite = TestSuite("Math")
    suite.add("addition", lambda: None)

    @suite.case("division")
    def check_division():
        assert 6 / 3 == 2

    summary = suite.run()
    print(summary)

Limitations:
    - Cases run sequentially on the calling thread
    - No timeouts; a hanging procedure blocks the whole run

================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, List, Optional

import allure
from loguru import logger

from .results import RunSummary, TestResult


Procedure = Callable[[], Any]


class SuiteStateError(RuntimeError):
    """Raised when a suite is used in a way its internal state cannot support."""
    pass


# ================================================================================
# Data Models
# ================================================================================

@dataclass
class TestCase:
    """A single named unit of test logic."""

    __test__ = False

    name: str
    procedure: Procedure
    tags: List[str] = field(default_factory=list)
    description: str = ""


def describe_failure(exc: Exception) -> str:
    """
    Build the failure message recorded for a raised exception.

    The exception's own text is used; the exception type name stands in
    when the text is empty. The type itself is recorded separately in
    TestResult.error_type.

    Args:
        exc: The exception raised by a procedure

    Returns:
        Non-empty failure message
    """
    return str(exc) or type(exc).__name__


# ================================================================================
# Test Suite
# ================================================================================

class TestSuite:
    """
    Registers named test cases and runs them in registration order.

    Duplicate case names are allowed and stay distinct cases. Registering
    while the suite is running is not supported and raises SuiteStateError.
    Each call to run() executes every case again from scratch.
    """

    __test__ = False

    def __init__(self, name: str = ""):
        """
        Initialize an empty suite.

        Args:
            name: Display name; an empty string means an unnamed suite
        """
        self.name = name
        self._cases: List[TestCase] = []
        self._running = False

    @property
    def display_name(self) -> str:
        return self.name or "<unnamed suite>"

    @property
    def cases(self) -> List[TestCase]:
        """Registered cases in registration order (a copy)."""
        return list(self._cases)

    def __len__(self) -> int:
        return len(self._cases)

    def __iter__(self) -> Iterator[TestCase]:
        return iter(list(self._cases))

    def __repr__(self) -> str:
        return f"TestSuite(name={self.name!r}, cases={len(self._cases)})"

    def add(
        self,
        name: str,
        procedure: Procedure,
        *,
        tags: Optional[Iterable[str]] = None,
        description: str = "",
    ) -> TestCase:
        """
        Append a named case to the suite.

        Args:
            name: Case label used in results and reports
            procedure: Zero-argument callable; raising means failure
            tags: Optional labels used by filter_by_tags()
            description: Optional free text

        Returns:
            The registered TestCase

        Raises:
            TypeError: If procedure is not callable
            SuiteStateError: If called while the suite is running
        """
        if self._running:
            raise SuiteStateError(
                f"Cannot add case '{name}' while suite '{self.display_name}' is running"
            )
        if not callable(procedure):
            raise TypeError(
                f"Procedure for case '{name}' must be callable, got {type(procedure).__name__}"
            )

        case = TestCase(
            name=name,
            procedure=procedure,
            tags=list(tags or []),
            description=description,
        )
        self._cases.append(case)
        logger.debug(f"Registered case '{name}' in suite '{self.display_name}'")
        return case

    def case(self, name: Optional[str] = None, **kwargs: Any) -> Callable[[Procedure], Procedure]:
        """
        Decorator form of add().

        Example:
            @suite.case("empty list")
            def check_empty():
                assert average([]) == 0
        """
        def decorator(func: Procedure) -> Procedure:
            self.add(name if name is not None else func.__name__, func, **kwargs)
            return func

        return decorator

    def filter_by_tags(self, tags: Iterable[str]) -> "TestSuite":
        """
        Build a new suite holding only cases that carry any of the tags.

        Args:
            tags: Tags to match

        Returns:
            New TestSuite with the same name; registration order is kept
        """
        wanted = set(tags)
        filtered = TestSuite(self.name)
        for case in self._cases:
            if wanted.intersection(case.tags):
                filtered._cases.append(case)

        logger.info(
            f"Filtered {len(filtered)} of {len(self)} cases in '{self.display_name}' with tags: {sorted(wanted)}"
        )
        return filtered

    def run(self) -> RunSummary:
        """
        Execute every registered case, in order, one at a time.

        Failures raised by procedures are recorded, never propagated.

        Returns:
            RunSummary with one result per registered case

        Raises:
            SuiteStateError: If the suite is already running or its case
                list is malformed
        """
        if self._running:
            raise SuiteStateError(f"Suite '{self.display_name}' is already running")

        self._running = True
        try:
            cases = self._cases
            if not isinstance(cases, list):
                raise SuiteStateError(
                    f"Case list of suite '{self.display_name}' is {type(cases).__name__}, expected list"
                )
            expected = len(cases)
            logger.info(f"Running suite '{self.display_name}' ({expected} cases)")

            results: List[TestResult] = []
            for index, case in enumerate(cases):
                self._check_case(index, case)
                results.append(self._run_case(case))

            if len(results) != expected or len(self._cases) != expected:
                raise SuiteStateError(
                    f"Case list of suite '{self.display_name}' changed during run "
                    f"({expected} -> {len(self._cases)})"
                )
        finally:
            self._running = False

        summary = RunSummary(results=results, suite_name=self.name)
        logger.info(f"Suite '{self.display_name}' finished - {summary.totals_line()}")
        return summary

    def _check_case(self, index: int, case: Any) -> None:
        if not isinstance(case, TestCase) or not callable(case.procedure):
            raise SuiteStateError(
                f"Malformed case at position {index} in suite '{self.display_name}': {case!r}"
            )

    def _run_case(self, case: TestCase) -> TestResult:
        """Invoke one procedure inside its own failure boundary."""
        started = time.perf_counter()
        try:
            with allure.step(f"Case: {case.name}"):
                case.procedure()
        except Exception as e:
            result = TestResult(
                name=case.name,
                passed=False,
                message=describe_failure(e),
                error_type=type(e).__name__,
                duration_ms=(time.perf_counter() - started) * 1000,
            )
            logger.debug(f"❌ FAIL: {case.name} - {result.message}")
            return result

        logger.debug(f"✅ PASS: {case.name}")
        return TestResult(
            name=case.name,
            passed=True,
            duration_ms=(time.perf_counter() - started) * 1000,
        )


__all__ = [
    "Procedure",
    "SuiteStateError",
    "TestCase",
    "TestSuite",
    "describe_failure",
]
