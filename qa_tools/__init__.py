"""
================================================================================
QA Tools
================================================================================

Framework-agnostic utilities shared by the API and UI suites.

Modules:
    - common: Configuration, logging setup and the per-test RunContext
    - performance: Named timing measurements and threshold assertions
    - retry: Bounded retry loops and polling waits
    - validation: Field, format and schema checks
    - report_tools: Allure attachment helpers

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "performance",
    "retry",
    "validation",
    "report_tools",
]
