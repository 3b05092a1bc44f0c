"""
================================================================================
Root Pytest Configuration
================================================================================

Registers project-wide markers and tags tests by the directory they live in.

================================================================================
"""

import pytest

pytest_plugins = ["pytester"]


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
        "markers", "P2: Medium priority tests - edge cases"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "unit: Tests against the in-memory fake driver"
    )
    config.addinivalue_line(
        "markers", "integration: Tests against a real Playwright browser"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "locator: Tests related to the locator cascade"
    )
    config.addinivalue_line(
        "markers", "verify: Tests related to the verification policies"
    )
    config.addinivalue_line(
        "markers", "browser: Tests that drive a real browser session"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-add the suite marker from the directory directly under testsuites/."""
    suites_dir = config.rootpath / "testsuites"
    for item in items:
        try:
            suite = item.path.relative_to(suites_dir).parts[0]
        except ValueError:
            continue
        if suite in ("unit", "integration"):
            item.add_marker(getattr(pytest.mark, suite))


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "WebVerify - Locator Cascade & Verification Framework",
        "=" * 60,
        "",
    ]
