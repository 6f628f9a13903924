"""
================================================================================
Suite Pytest Configuration
================================================================================

This module registers the project-wide markers and tags collected tests with
their domain marker (api / ui / unit) based on location.

================================================================================
"""

from pathlib import Path

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "integration: Multi-step flows across endpoints or pages"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )
    config.addinivalue_line(
        "markers", "performance: Response time and throughput checks"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "api: API-specific tests"
    )
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )
    config.addinivalue_line(
        "markers", "unit: Offline framework tests"
    )
    config.addinivalue_line(
        "markers", "mutation: Mutation/negative tests"
    )

    # Dependency markers
    config.addinivalue_line(
        "markers", "requires_external: Tests requiring live public services"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-add the domain marker from the test's directory."""
    for item in items:
        path = str(item.fspath)
        if "api_testing" in path:
            item.add_marker(pytest.mark.api)
        elif "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
        elif "unit" in Path(path).parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "QA POM Framework - Playwright / httpx / pytest",
        "=" * 60,
        "",
    ]
