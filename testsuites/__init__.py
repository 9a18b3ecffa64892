"""
Test suites package.

Keeps `testsuites` importable to support:
  - IDE navigation
  - programmatic runners (e.g., `run_tests.py`)
  - shared demo page objects (`testsuites.ui_testing.pages`)
"""
