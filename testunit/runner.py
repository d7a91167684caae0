# ================================================================================
# Suite Runner
# ================================================================================
#
# Command-line entry point for executing YAML-defined test suites.
#
# Features:
#   - Run one or more suite files, or every suite in a directory
#   - Filter cases by tag
#   - Plain-text or JSON output on stdout
#   - Allure attachments for each summary
#
# Usage:
#   testunit suites/average.yaml
#   testunit suites/ --tags smoke --json
#   python run_tests.py suites/ --verbose
#
# ================================================================================

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger

from testunit.common import get_config, init_logger
from testunit.framework.config_loader import ConfigLoader
from testunit.framework.results import RunSummary
from testunit.framework.suite import TestSuite
from testunit.framework.suite_loader import SuiteDefinitionError, SuiteLoader
from testunit.report_tools.allure_utils import attach_summary


EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_NO_SUITES = 2


class TestRunner:
    """
    Loads suites, runs them and reports their summaries.

    This class handles:
    - Suite discovery from files and directories
    - Tag filtering
    - Output formatting and exit codes
    """

    __test__ = False

    def __init__(
        self,
        paths: Sequence[str],
        tags: Optional[List[str]] = None,
        json_output: bool = False,
        allure_report: bool = True,
        stream=None,
    ):
        """
        Initialize test runner.

        Args:
            paths: Suite files or directories containing suite files
            tags: Only run cases carrying any of these tags
            json_output: Print summaries as JSON instead of text
            allure_report: Attach summaries to the Allure report
            stream: Output stream (defaults to stdout)
        """
        self.paths = [Path(p) for p in paths]
        self.tags = tags or []
        self.json_output = json_output
        self.allure_report = allure_report
        self.stream = stream or sys.stdout
        self.load_errors: List[str] = []

    def run(self) -> int:
        """
        Execute every loaded suite.

        Returns:
            Exit code (0 all passed, 1 any failure or unreadable suite file,
            2 nothing loaded)
        """
        suites = self.load_suites()
        if not suites:
            logger.error("No suites loaded")
            return EXIT_NO_SUITES

        summaries = [suite.run() for suite in suites]

        if self.allure_report:
            indent = get_config("report.json_indent", 2)
            for summary in summaries:
                attach_summary(summary, indent=indent)

        self._write(summaries)
        return self._print_summary(summaries)

    def load_suites(self) -> List[TestSuite]:
        """Load every suite named on the command line, applying tag filters."""
        self.load_errors = []
        suites: List[TestSuite] = []
        for path in self.paths:
            if path.is_dir():
                loader = SuiteLoader(path)
                suites.extend(loader.load_all())
                self.load_errors.extend(loader.load_errors)
                continue
            try:
                suites.append(SuiteLoader(path.parent).load_file(path))
            except SuiteDefinitionError as e:
                logger.error(f"Skipping {path}: {e}")
                self.load_errors.append(str(e))

        if self.tags:
            suites = [suite.filter_by_tags(self.tags) for suite in suites]
        return suites

    def _write(self, summaries: List[RunSummary]) -> None:
        if self.json_output:
            payload = [summary.to_dict() for summary in summaries]
            indent = get_config("report.json_indent", 2)
            self.stream.write(json.dumps(payload, indent=indent) + "\n")
            return

        for summary in summaries:
            if summary.suite_name:
                self.stream.write(f"== {summary.suite_name}\n")
            self.stream.write(summary.render() + "\n")

    def _print_summary(self, summaries: List[RunSummary]) -> int:
        """Log overall totals and compute the exit code."""
        passed = sum(s.passed_count for s in summaries)
        failed = sum(s.failed_count for s in summaries)

        logger.info("=" * 60)
        for error in self.load_errors:
            logger.error(f"❌ SUITE NOT LOADED: {error}")
        if failed == 0 and not self.load_errors:
            logger.info(f"✅ ALL SUITES PASSED ({len(summaries)} suites, {passed} cases)")
        elif failed:
            logger.error(f"❌ {failed} CASES FAILED across {len(summaries)} suites ({passed} passed)")
        logger.info("=" * 60)

        return EXIT_OK if failed == 0 and not self.load_errors else EXIT_FAILURES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="testunit",
        description="Minimal named test-suite runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run a single suite
  testunit suites/average.yaml

  # Run every suite in a directory, smoke cases only
  testunit suites/ --tags smoke

  # Machine-readable output
  testunit suites/ --json
        """
    )

    parser.add_argument(
        "paths",
        nargs="+",
        help="Suite YAML files or directories containing them"
    )

    parser.add_argument(
        "--tags",
        nargs="+",
        default=[],
        help="Only run cases carrying any of these tags"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print summaries as JSON"
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML configuration file"
    )

    parser.add_argument(
        "--no-allure",
        action="store_true",
        help="Disable Allure attachments"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # suite targets are imported relative to the invocation directory
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    if args.config:
        ConfigLoader.reset()
        ConfigLoader(Path(args.config))

    init_logger(level="DEBUG" if args.verbose else None, force=True)

    runner = TestRunner(
        paths=args.paths,
        tags=args.tags,
        json_output=args.json,
        allure_report=not args.no_allure and get_config("report.allure", True),
    )
    return runner.run()


if __name__ == "__main__":
    sys.exit(main())
