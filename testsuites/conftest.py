"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the test suites.
It registers common markers.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "concurrency: Tests exercising multi-threaded reporting"
    )
    config.addinivalue_line(
        "markers", "plugin: Tests running pytest in-process through pytester"
    )

    # Component markers
    config.addinivalue_line(
        "markers", "unit: Unit tests for the reporting engine"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Auto-adds the 'unit' marker to tests under testsuites/unit.
    """
    for item in items:
        if "unit" in item.path.parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "API Automation Testing Framework - Execution Reporting",
        "=" * 60,
        "",
    ]
