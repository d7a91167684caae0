"""
Test suites package.

Kept importable so that YAML suite definitions under `testsuites/cases/`
can reference their procedures by module path.
"""
