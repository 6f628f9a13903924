from qa_tools.performance.performance_utils import (
    PerformanceMetrics,
    PerformanceThresholdError,
    PerformanceTracker,
    percentile,
)

__all__ = [
    "PerformanceMetrics",
    "PerformanceThresholdError",
    "PerformanceTracker",
    "percentile",
]
