"""
Repository-level pytest configuration.

Why this exists:
  - Suites that hit public demo sites (JSONPlaceholder, ReqRes, playwright.dev,
    the-internet.herokuapp.com) only run when explicitly requested, so the
    offline unit suite stays green without network access
  - Logging is initialized once per session from config/config.yaml
  - Every test gets its own RunContext (bound logger + performance metrics)

Enable live suites with `pytest --run-external` or QA_RUN_EXTERNAL=1.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from qa_tools.common import RunContext, init_logger


RUN_EXTERNAL_ENV = "QA_RUN_EXTERNAL"


def pytest_addoption(parser):
    parser.addoption(
        "--run-external",
        action="store_true",
        default=False,
        help="Run tests marked requires_external (live public sites).",
    )


def _external_enabled(config) -> bool:
    if config.getoption("--run-external"):
        return True
    return os.environ.get(RUN_EXTERNAL_ENV, "").lower() in ("1", "true", "yes")


def pytest_collection_modifyitems(config, items):
    if _external_enabled(config):
        return

    skip_external = pytest.mark.skip(
        reason=f"needs --run-external or {RUN_EXTERNAL_ENV}=1"
    )
    for item in items:
        if "requires_external" in item.keywords:
            item.add_marker(skip_external)


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _session_logging() -> Generator[None, None, None]:
    init_logger()
    yield


@pytest.fixture
def run_context(request) -> Generator[RunContext, None, None]:
    """
    Fresh RunContext per test.

    Usage:
        def test_example(run_context):
            with run_context.performance.measure("load users"):
                ...
    """
    with RunContext(name=request.node.nodeid) as context:
        yield context
