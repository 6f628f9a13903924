"""
Test suites package.

Kept importable so IDE navigation, `run_tests.py` and CI can import page
objects, clients and factories directly (e.g. `from qa_suites.api_testing.framework
import UsersClient`).
"""
