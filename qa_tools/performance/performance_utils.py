"""
================================================================================
Performance Utilities
================================================================================

Named start/end measurements that accumulate request timings and report
aggregate statistics (average, p95, success rate).

A PerformanceTracker is owned by one RunContext (one test), so parallel
workers never share metrics.

Usage:
    tracker = PerformanceTracker()
    with tracker.measure("users_list") as metrics:
        response = users_client.get_all_users()
        tracker.record_request("users_list", "/users", response.response_time, response.ok)
    tracker.assert_performance("users_list", max_average_response_time=2000)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import math
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

from loguru import logger

from qa_tools.report_tools.allure_utils import attach_json


class PerformanceThresholdError(AssertionError):
    """Raised when a measurement exceeds a caller-supplied threshold."""
    pass


@dataclass
class RequestSample:
    """Single recorded request."""
    url: str
    response_time: float
    success: bool
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


@dataclass
class PerformanceMetrics:
    """
    Aggregate record for one named measurement.

    Times are in milliseconds. With no recorded requests every aggregate is 0.
    """
    name: str
    start_time: float
    end_time: float = 0.0
    requests: List[RequestSample] = field(default_factory=list)

    @property
    def duration(self) -> float:
        if not self.end_time:
            return 0.0
        return self.end_time - self.start_time

    @property
    def total_requests(self) -> int:
        return len(self.requests)

    @property
    def successful_requests(self) -> int:
        return sum(1 for r in self.requests if r.success)

    @property
    def failed_requests(self) -> int:
        return self.total_requests - self.successful_requests

    @property
    def response_times(self) -> List[float]:
        return [r.response_time for r in self.requests]

    @property
    def average_response_time(self) -> float:
        times = self.response_times
        return sum(times) / len(times) if times else 0.0

    @property
    def min_response_time(self) -> float:
        return min(self.response_times, default=0.0)

    @property
    def max_response_time(self) -> float:
        return max(self.response_times, default=0.0)

    @property
    def p95_response_time(self) -> float:
        return percentile(self.response_times, 95)

    @property
    def success_rate(self) -> float:
        """Percentage of successful requests (0-100)."""
        if not self.requests:
            return 0.0
        return self.successful_requests / self.total_requests * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "duration_ms": round(self.duration, 2),
            "total_requests": self.total_requests,
            "successful_requests": self.successful_requests,
            "failed_requests": self.failed_requests,
            "success_rate": round(self.success_rate, 2),
            "average_response_time_ms": round(self.average_response_time, 2),
            "p95_response_time_ms": round(self.p95_response_time, 2),
            "min_response_time_ms": round(self.min_response_time, 2),
            "max_response_time_ms": round(self.max_response_time, 2),
        }


def percentile(values: List[float], pct: float) -> float:
    """
    Nearest-rank percentile.

    >>> percentile([100, 200, 300], 95)
    300
    """
    if not values:
        return 0.0
    ordered = sorted(values)
    rank = max(1, math.ceil(pct / 100 * len(ordered)))
    return ordered[rank - 1]


def _now_ms() -> float:
    return time.perf_counter() * 1000


class PerformanceTracker:
    """In-memory store of named measurements."""

    def __init__(self) -> None:
        self._metrics: Dict[str, PerformanceMetrics] = {}

    def start_measurement(self, name: str) -> PerformanceMetrics:
        """Start (or restart) a measurement; earlier samples for name are dropped."""
        metrics = PerformanceMetrics(name=name, start_time=_now_ms())
        self._metrics[name] = metrics
        logger.debug(f"⏱️ Started measurement: {name}")
        return metrics

    def record_request(
        self,
        name: str,
        url: str,
        response_time: float,
        success: bool,
    ) -> None:
        """Record one request; unknown names are ignored with a warning."""
        metrics = self._metrics.get(name)
        if metrics is None:
            logger.warning(f"No active measurement '{name}', sample for {url} ignored")
            return
        metrics.requests.append(
            RequestSample(url=url, response_time=float(response_time), success=success)
        )

    def end_measurement(self, name: str) -> Optional[PerformanceMetrics]:
        """
        Close a measurement and report its summary.

        Returns:
            The finished PerformanceMetrics, or None if name was never started
        """
        metrics = self._metrics.get(name)
        if metrics is None:
            return None

        metrics.end_time = _now_ms()
        summary = metrics.to_dict()
        logger.info(f"📈 Performance summary for {name}: {summary}")
        attach_json(summary, name=f"Performance: {name}")
        return metrics

    def get_metrics(self, name: str) -> Optional[PerformanceMetrics]:
        return self._metrics.get(name)

    def clear(self) -> None:
        self._metrics.clear()

    @contextmanager
    def measure(self, name: str) -> Iterator[PerformanceMetrics]:
        """Start a measurement on enter and end it on exit."""
        metrics = self.start_measurement(name)
        try:
            yield metrics
        finally:
            self.end_measurement(name)

    def assert_performance(
        self,
        name: str,
        max_duration: Optional[float] = None,
        max_average_response_time: Optional[float] = None,
        min_success_rate: Optional[float] = None,
        max_p95_response_time: Optional[float] = None,
    ) -> None:
        """
        Compare a measurement against thresholds.

        Args:
            name: Measurement name
            max_duration: Maximum wall time in ms
            max_average_response_time: Maximum mean response time in ms
            min_success_rate: Minimum success percentage (0-100)
            max_p95_response_time: Maximum p95 response time in ms

        Raises:
            ValueError: If no measurement exists for name
            PerformanceThresholdError: On the first threshold exceeded
        """
        metrics = self._metrics.get(name)
        if metrics is None:
            raise ValueError(f"No performance data found for: {name}")

        if max_duration is not None and metrics.duration > max_duration:
            raise PerformanceThresholdError(
                f"Duration {metrics.duration:.2f}ms exceeded threshold {max_duration}ms"
            )

        if (
            max_average_response_time is not None
            and metrics.average_response_time > max_average_response_time
        ):
            raise PerformanceThresholdError(
                f"Average response time {metrics.average_response_time:.2f}ms "
                f"exceeded threshold {max_average_response_time}ms"
            )

        if (
            max_p95_response_time is not None
            and metrics.p95_response_time > max_p95_response_time
        ):
            raise PerformanceThresholdError(
                f"p95 response time {metrics.p95_response_time:.2f}ms "
                f"exceeded threshold {max_p95_response_time}ms"
            )

        if min_success_rate is not None and metrics.success_rate < min_success_rate:
            raise PerformanceThresholdError(
                f"Success rate {metrics.success_rate:.2f}% below threshold {min_success_rate}%"
            )


__all__ = [
    "PerformanceTracker",
    "PerformanceMetrics",
    "PerformanceThresholdError",
    "RequestSample",
    "percentile",
]
