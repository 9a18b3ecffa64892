"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and marks tests by the directory they live in.

================================================================================
"""

import pytest

import pageweave


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for release"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests against a real browser"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "unit: Framework tests against an in-memory page"
    )
    config.addinivalue_line(
        "markers", "ui: Browser-driven tests"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests by the suite directory they belong to."""
    for item in items:
        path = str(item.fspath).replace("\\", "/")

        if "/unit/" in path:
            item.add_marker(pytest.mark.unit)

        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        f"pageweave {pageweave.__version__} - Page Object Framework",
        "=" * 60,
        "",
    ]
