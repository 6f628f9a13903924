"""
================================================================================
Run Context
================================================================================

Per-test carrier for the logger binding and performance metrics.

A RunContext is created by the `run_context` fixture for every test and handed
to API clients and page helpers, so nothing about one test's metrics leaks
into another xdist worker or another test.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from loguru import logger

from qa_tools.performance.performance_utils import PerformanceTracker


def _new_run_id() -> str:
    return f"run_{uuid4().hex[:8]}"


@dataclass
class RunContext:
    """
    Scoped state for one test execution.

    Attributes:
        name: Test node id or any label
        run_id: Unique id, bound into every log record as `run_id`
        worker: xdist worker id ("master" when not distributed)
        performance: Metrics collected during this run
    """
    name: str = "adhoc"
    run_id: str = field(default_factory=_new_run_id)
    worker: str = field(default_factory=lambda: os.environ.get("PYTEST_XDIST_WORKER", "master"))
    performance: PerformanceTracker = field(default_factory=PerformanceTracker)

    def __post_init__(self) -> None:
        self.log = logger.bind(run_id=self.run_id, worker=self.worker, test=self.name)

    def close(self) -> None:
        """Drop collected metrics once the test is done."""
        self.performance.clear()
        self.log.debug(f"Run context closed: {self.name}")

    def __enter__(self) -> "RunContext":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


__all__ = ["RunContext"]
