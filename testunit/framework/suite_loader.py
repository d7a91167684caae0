"""
================================================================================
Suite Loader Module
================================================================================

This module builds test suites from YAML definitions. Each case names a
zero-argument callable by import path, so test logic stays in Python while
suite composition lives in data files.

File format:
    suite: Average
    cases:
      - name: empty list returns zero
        target: mypackage.checks:empty_list_returns_zero
        tags: [smoke]
        description: Averaging nothing yields the sentinel value

Key Features:
- `module:attribute` targets, dotted attribute paths allowed
- Case entries that cannot be resolved are kept as failing cases
- Directory loading in sorted file order

================================================================================
"""

import importlib
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

import yaml
from loguru import logger

from .suite import TestSuite


class SuiteDefinitionError(Exception):
    """Raised when a suite definition file cannot be read."""
    pass


def resolve_target(target: str) -> Callable[[], Any]:
    """
    Import the callable referenced by a ``module:attribute`` path.

    Args:
        target: Import path such as "package.module:function" or
            "package.module:Class.method"

    Returns:
        The referenced callable

    Raises:
        ValueError: If the path is malformed or does not point at a callable
        ImportError: If the module cannot be imported
        AttributeError: If the attribute does not exist
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Target must look like 'module:attribute', got '{target}'")

    obj: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)

    if not callable(obj):
        raise ValueError(f"Target '{target}' is not callable")
    return obj


class SuiteLoader:
    """
    Loads test suites from YAML files.

    Example:
        loader = SuiteLoader("suites")
        for suite in loader.load_all():
            print(suite.run())
    """

    def __init__(self, suites_directory: Union[str, Path] = "."):
        """
        Initialize the suite loader.

        Args:
            suites_directory: Directory searched by load_all()
        """
        self.suites_dir = Path(suites_directory)
        self.loaded_suites: List[TestSuite] = []
        self.load_errors: List[str] = []

    def load_file(self, file_path: Union[str, Path]) -> TestSuite:
        """
        Load a single suite definition.

        Args:
            file_path: Path to the YAML file

        Returns:
            TestSuite holding one case per entry, in file order

        Raises:
            SuiteDefinitionError: If the file is missing, is not valid YAML,
                its top level is not a mapping, or 'cases' is not a list
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise SuiteDefinitionError(f"Suite file not found: {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SuiteDefinitionError(f"YAML parsing error in {file_path}: {e}") from e

        if content is None:
            logger.warning(f"Empty YAML file: {file_path}")
            content = {}
        if not isinstance(content, dict):
            raise SuiteDefinitionError(
                f"Suite file {file_path} must contain a mapping, got {type(content).__name__}"
            )

        suite = TestSuite(str(content.get("suite", file_path.stem)))

        cases_data = content.get("cases") or []
        if not isinstance(cases_data, list):
            raise SuiteDefinitionError(
                f"'cases' in {file_path} must be a list, got {type(cases_data).__name__}"
            )

        for index, case_data in enumerate(cases_data):
            self._add_case(suite, index, case_data, file_path)

        logger.info(f"Loaded suite '{suite.display_name}' with {len(suite)} cases from {file_path.name}")
        return suite

    def load_all(self, pattern: str = "*.yaml") -> List[TestSuite]:
        """
        Load every suite definition in the configured directory.

        Files that cannot be read are logged, recorded in ``load_errors``
        and skipped; the remaining files still load.

        Args:
            pattern: Glob pattern for matching YAML files

        Returns:
            List of loaded suites in sorted file order
        """
        self.load_errors = []
        if not self.suites_dir.is_dir():
            message = f"Suites directory not found: {self.suites_dir}"
            logger.error(message)
            self.load_errors.append(message)
            return []

        yaml_files = set(self.suites_dir.glob(pattern))
        yaml_files.update(self.suites_dir.glob("*.yml"))

        logger.info(f"Found {len(yaml_files)} suite files in {self.suites_dir}")

        suites = []
        for file_path in sorted(yaml_files):
            try:
                suites.append(self.load_file(file_path))
            except SuiteDefinitionError as e:
                logger.error(f"Skipping suite file {file_path.name}: {e}")
                self.load_errors.append(str(e))

        self.loaded_suites = suites
        return suites

    def _add_case(self, suite: TestSuite, index: int, data: Any, source_file: Path) -> str:
        """
        Register one case entry on the suite.

        Entries that cannot be turned into a runnable case are still
        registered, with a procedure that fails with the reason, so they
        show up in the run summary.

        Returns:
            The registered case name
        """
        if not isinstance(data, dict):
            data = {"invalid entry": data}

        name = data.get("name")
        name = f"{source_file.name}[{index}]" if name is None else str(name)
        target = data.get("target")

        tags = data.get("tags") or []
        if isinstance(tags, str):
            tags = [tags]

        if not target:
            reason = f"Case entry has no 'target': {data!r}"
            logger.warning(f"{reason} in {source_file}")
            procedure = _failing_procedure(reason)
        else:
            try:
                procedure = resolve_target(str(target))
            except (ImportError, AttributeError, ValueError) as e:
                reason = f"Cannot resolve target '{target}': {e}"
                logger.error(f"{reason} (case '{name}' in {source_file})")
                procedure = _failing_procedure(reason)

        suite.add(
            name,
            procedure,
            tags=[str(t) for t in tags],
            description=str(data.get("description", "")),
        )
        return name


def _failing_procedure(reason: str) -> Callable[[], Any]:
    def procedure():
        raise SuiteDefinitionError(reason)

    return procedure


def dump_suite_template(suite_name: str, targets: Dict[str, str]) -> str:
    """
    Render a YAML suite definition for the given case targets.

    Args:
        suite_name: Suite display name
        targets: Mapping of case name to ``module:attribute`` target

    Returns:
        YAML text loadable by SuiteLoader.load_file()
    """
    document = {
        "suite": suite_name,
        "cases": [{"name": name, "target": target} for name, target in targets.items()],
    }
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)


__all__ = [
    "SuiteDefinitionError",
    "SuiteLoader",
    "dump_suite_template",
    "resolve_target",
]
